"""Pydantic models for ESPN tournament, scoreboard and summary responses."""

from typing import Iterator, List, Optional, Union

from .bracket import DictCompatibleBaseModel


class EspnTeam(DictCompatibleBaseModel):
    id: Optional[str] = None
    displayName: Optional[str] = None
    shortDisplayName: Optional[str] = None
    abbreviation: Optional[str] = None
    color: Optional[str] = None


class EspnRank(DictCompatibleBaseModel):
    current: Optional[int] = None


class EspnRecord(DictCompatibleBaseModel):
    type: Optional[str] = None
    summary: Optional[str] = None


class EspnCompetitor(DictCompatibleBaseModel):
    """A competitor; homeAway doubles as the top/bottom slot"""

    id: Optional[str] = None
    homeAway: Optional[str] = None
    team: Optional[EspnTeam] = None
    # ESPN sends scores as strings
    score: Optional[Union[str, int]] = None
    winner: Optional[bool] = None
    curatedRank: Optional[EspnRank] = None
    records: Optional[List[EspnRecord]] = None
    placeholder: Optional[str] = None


class EspnStatusType(DictCompatibleBaseModel):
    name: Optional[str] = None
    completed: Optional[bool] = None


class EspnStatus(DictCompatibleBaseModel):
    type: Optional[EspnStatusType] = None
    period: Optional[int] = None
    displayClock: Optional[str] = None


class EspnCompetition(DictCompatibleBaseModel):
    competitors: Optional[List[EspnCompetitor]] = None


class EspnVenue(DictCompatibleBaseModel):
    fullName: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None


class EspnEvent(DictCompatibleBaseModel):
    """A full game event with status, competitors and venue"""

    id: Optional[str] = None
    name: Optional[str] = None
    status: Optional[EspnStatus] = None
    competitions: Optional[List[EspnCompetition]] = None
    # ISO 8601
    date: Optional[str] = None
    venue: Optional[EspnVenue] = None


class EspnMatchup(DictCompatibleBaseModel):
    """A bracket matchup: either an embedded event or bare competitors"""

    id: Optional[str] = None
    event: Optional[EspnEvent] = None
    competitors: Optional[List[EspnCompetitor]] = None
    # Region name on the tournaments endpoint
    note: Optional[str] = None


class EspnRound(DictCompatibleBaseModel):
    number: Optional[int] = None
    name: Optional[str] = None
    matchups: Optional[List[EspnMatchup]] = None
    games: Optional[List[EspnMatchup]] = None

    def iter_matchups(self) -> Iterator[EspnMatchup]:
        """Matchups may be nested under either "matchups" or "games"."""
        yield from self.matchups or []
        yield from self.games or []


class EspnBracket(DictCompatibleBaseModel):
    rounds: Optional[List[EspnRound]] = None
    full: Optional[bool] = None


class TournamentEntry(DictCompatibleBaseModel):
    id: str
    name: Optional[str] = None
    bracket: Optional[EspnBracket] = None

    @property
    def has_bracket(self) -> bool:
        return bool(self.bracket and self.bracket.rounds)


class TournamentsResponse(DictCompatibleBaseModel):
    tournaments: Optional[List[TournamentEntry]] = None


class ScoreboardResponse(DictCompatibleBaseModel):
    events: Optional[List[EspnEvent]] = None


class EspnPeriod(DictCompatibleBaseModel):
    number: Optional[int] = None


class EspnClock(DictCompatibleBaseModel):
    displayValue: Optional[str] = None


class EspnPlay(DictCompatibleBaseModel):
    period: Optional[EspnPeriod] = None
    clock: Optional[EspnClock] = None
    text: Optional[str] = None
    homeScore: Optional[int] = None
    awayScore: Optional[int] = None


class EspnAthlete(DictCompatibleBaseModel):
    displayName: Optional[str] = None


class EspnAthleteStats(DictCompatibleBaseModel):
    athlete: Optional[EspnAthlete] = None
    stats: Optional[List[str]] = None


class EspnStatCategory(DictCompatibleBaseModel):
    """A box score statistics block; values line up with keys by position"""

    name: Optional[str] = None
    athletes: Optional[List[EspnAthleteStats]] = None
    totals: Optional[List[str]] = None
    keys: Optional[List[str]] = None
    labels: Optional[List[str]] = None


class EspnTeamPlayers(DictCompatibleBaseModel):
    team: Optional[EspnTeam] = None
    statistics: Optional[List[EspnStatCategory]] = None


class EspnBoxscore(DictCompatibleBaseModel):
    players: Optional[List[EspnTeamPlayers]] = None


class SummaryResponse(DictCompatibleBaseModel):
    """Game summary: play-by-play and box score"""

    plays: Optional[List[EspnPlay]] = None
    boxscore: Optional[EspnBoxscore] = None
