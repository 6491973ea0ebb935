"""Canonical bracket data model shared by every data source."""

from datetime import datetime
from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, Field


class DictCompatibleBaseModel(BaseModel):
    """Custom BaseModel with dictionary-style access"""

    def __getitem__(self, key: str) -> Any:
        """Allow dictionary-style access"""
        return getattr(self, key)

    def __setitem__(self, key: str, value: Any) -> None:
        """Allow dictionary-style assignment"""
        setattr(self, key, value)

    def get(self, key: str, default: Any = None) -> Any:
        """Allow .get() method like dictionaries"""
        return getattr(self, key, default)

    model_config = {"extra": "allow"}


class RoundKind(IntEnum):
    """Tournament stage, totally ordered from First Four to the title game"""

    FIRST_FOUR = 0
    FIRST = 1
    SECOND = 2
    SWEET_16 = 3
    ELITE_8 = 4
    FINAL_FOUR = 5
    CHAMPIONSHIP = 6

    @property
    def label(self) -> str:
        return ROUND_LABELS[self]

    @property
    def is_final_four(self) -> bool:
        """Final Four and Championship games live in the National region"""
        return self in (RoundKind.FINAL_FOUR, RoundKind.CHAMPIONSHIP)

    @property
    def depth(self) -> int | None:
        """Column index inside a regional sub-bracket (First = 0 .. Elite 8 = 3)"""
        if RoundKind.FIRST <= self <= RoundKind.ELITE_8:
            return self - RoundKind.FIRST
        return None

    def next(self) -> "RoundKind | None":
        if self == RoundKind.CHAMPIONSHIP:
            return None
        return RoundKind(self + 1)

    def prev(self) -> "RoundKind | None":
        if self == RoundKind.FIRST_FOUR:
            return None
        return RoundKind(self - 1)

    @classmethod
    def from_round_number(cls, number: int | None) -> "RoundKind":
        """Map a 1-based feed round number (1 = First Four) to a RoundKind.

        Anything outside 1..7 is treated as the first round.
        """
        if number is not None and 1 <= number <= 7:
            return cls(number - 1)
        return cls.FIRST


ROUND_LABELS: dict[RoundKind, str] = {
    RoundKind.FIRST_FOUR: "First Four",
    RoundKind.FIRST: "1st Round",
    RoundKind.SECOND: "2nd Round",
    RoundKind.SWEET_16: "Sweet 16",
    RoundKind.ELITE_8: "Elite Eight",
    RoundKind.FINAL_FOUR: "Final Four",
    RoundKind.CHAMPIONSHIP: "Championship",
}


class GameStatus(str, Enum):
    """Coarse game state"""

    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    FINAL = "final"
    POSTPONED = "postponed"


class Team(DictCompatibleBaseModel):
    """A resolved tournament team"""

    id: str
    name: str
    short_name: str = ""
    abbrev: str = ""
    color: str | None = None


class TeamSeed(DictCompatibleBaseModel):
    """One slot of a game: a seeded team, or a placeholder until it is known"""

    seed: int = 0
    team: Team | None = None
    placeholder: str | None = None

    @property
    def is_resolved(self) -> bool:
        return self.team is not None

    @property
    def display_name(self) -> str:
        if self.team is not None:
            return self.team.short_name or self.team.name
        return self.placeholder or "TBD"


class Game(DictCompatibleBaseModel):
    """A single bracket game"""

    id: str
    top: TeamSeed = Field(default_factory=TeamSeed)
    bottom: TeamSeed = Field(default_factory=TeamSeed)
    status: GameStatus = GameStatus.SCHEDULED
    score: tuple[int, int] | None = None
    winner_id: str | None = None
    period: int | None = None
    clock: str | None = None
    start_time: datetime | None = None
    location: str | None = None
    event_id: str | None = None

    @property
    def is_live(self) -> bool:
        return self.status == GameStatus.IN_PROGRESS

    def winner(self) -> Team | None:
        """Return the winning team, only when the winner id matches a resolved slot"""
        if self.winner_id is None:
            return None
        for slot in (self.top, self.bottom):
            if slot.team is not None and slot.team.id == self.winner_id:
                return slot.team
        return None

    def is_winner(self, slot: str) -> bool:
        """Whether the "top" or "bottom" slot holds the winner"""
        seed = self.top if slot == "top" else self.bottom
        winner = self.winner()
        return winner is not None and seed.team is not None and seed.team.id == winner.id


class Round(DictCompatibleBaseModel):
    """All games of one RoundKind inside a region"""

    kind: RoundKind
    games: list[Game] = Field(default_factory=list)


class Region(DictCompatibleBaseModel):
    """A regional sub-bracket, or the synthetic National region"""

    id: str
    name: str
    rounds: list[Round] = Field(default_factory=list)

    @property
    def is_national(self) -> bool:
        return self.name == NATIONAL_REGION

    def round(self, kind: RoundKind) -> Round | None:
        for round_ in self.rounds:
            if round_.kind == kind:
                return round_
        return None


NATIONAL_REGION = "National"


class Tournament(DictCompatibleBaseModel):
    """The whole bracket: ordered regions with National last"""

    id: str
    name: str
    year: int
    regions: list[Region] = Field(default_factory=list)

    def bracket_regions(self) -> list[Region]:
        """Regions other than National, in display order"""
        return [r for r in self.regions if not r.is_national]

    def national(self) -> Region | None:
        return self.region_named(NATIONAL_REGION)

    def region_named(self, name: str) -> Region | None:
        for region in self.regions:
            if region.name == name:
                return region
        return None

    def iter_games(self):
        for region in self.regions:
            for round_ in region.rounds:
                yield from round_.games

    def find_game(self, game_id: str) -> Game | None:
        for game in self.iter_games():
            if game.id == game_id:
                return game
        return None

    def merge_updates(self, updates: list[Game]) -> int:
        """Replace every game whose id matches an update; returns how many matched.

        Updates with an unknown or empty id are ignored. Structure is left untouched.
        """
        by_id = {game.id: game for game in updates if game.id}
        if not by_id:
            return 0
        merged = 0
        for region in self.regions:
            for round_ in region.rounds:
                for i, game in enumerate(round_.games):
                    update = by_id.get(game.id)
                    if update is not None:
                        round_.games[i] = update
                        merged += 1
        return merged


class Play(DictCompatibleBaseModel):
    """One play-by-play entry"""

    period: int = 0
    clock: str = ""
    description: str = ""
    home_score: int = 0
    away_score: int = 0


class PlayerLine(DictCompatibleBaseModel):
    """A box score row"""

    name: str
    points: int = 0
    rebounds: int = 0
    assists: int = 0
    minutes: str = ""
    fg: str = ""
    fg3: str = ""


class BoxScore(DictCompatibleBaseModel):
    team: Team | None = None
    players: list[PlayerLine] = Field(default_factory=list)
    totals: PlayerLine | None = None


class GameDetail(DictCompatibleBaseModel):
    """Play-by-play and box score for one game"""

    game_id: str
    plays: list[Play] = Field(default_factory=list)
    home_box: BoxScore = Field(default_factory=BoxScore)
    away_box: BoxScore = Field(default_factory=BoxScore)
