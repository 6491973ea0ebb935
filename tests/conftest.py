"""Shared payload builders for bracket tests"""

from typing import Any

import pytest

from bracketwatch.models.bracket import (
    Game,
    GameStatus,
    Region,
    Round,
    RoundKind,
    Team,
    TeamSeed,
    Tournament,
)


def make_game(
    game_id: str,
    status: GameStatus = GameStatus.SCHEDULED,
    top: str | None = "Alpha",
    bottom: str | None = "Beta",
    winner: str | None = None,
    score: tuple[int, int] | None = None,
    event_id: str | None = None,
) -> Game:
    """Build a Game whose team ids are the lower-cased names"""

    def seed(name: str | None, number: int) -> TeamSeed:
        if name is None:
            return TeamSeed(placeholder="TBA")
        return TeamSeed(seed=number, team=Team(id=name.lower(), name=name, short_name=name))

    return Game(
        id=game_id,
        top=seed(top, 1),
        bottom=seed(bottom, 16),
        status=status,
        winner_id=winner.lower() if winner else None,
        score=score,
        event_id=event_id,
    )


def make_region(name: str, statuses: dict[RoundKind, GameStatus] | None = None) -> Region:
    """A full 15-game region; `statuses` sets every game of a round"""
    statuses = statuses or {}
    rounds = []
    for kind, count in (
        (RoundKind.FIRST, 8),
        (RoundKind.SECOND, 4),
        (RoundKind.SWEET_16, 2),
        (RoundKind.ELITE_8, 1),
    ):
        status = statuses.get(kind, GameStatus.SCHEDULED)
        rounds.append(
            Round(
                kind=kind,
                games=[
                    make_game(f"{name.lower()}-{kind.value}-{i}", status=status)
                    for i in range(count)
                ],
            )
        )
    return Region(id=name.lower(), name=name, rounds=rounds)


def make_tournament(
    statuses: dict[RoundKind, GameStatus] | None = None,
    national_statuses: dict[RoundKind, GameStatus] | None = None,
) -> Tournament:
    national_statuses = national_statuses or {}
    regions = [make_region(name, statuses) for name in ("East", "West", "South", "Midwest")]
    regions.append(
        Region(
            id="national",
            name="National",
            rounds=[
                Round(
                    kind=RoundKind.FINAL_FOUR,
                    games=[
                        make_game(
                            f"ff-{i}",
                            status=national_statuses.get(
                                RoundKind.FINAL_FOUR, GameStatus.SCHEDULED
                            ),
                        )
                        for i in range(2)
                    ],
                ),
                Round(
                    kind=RoundKind.CHAMPIONSHIP,
                    games=[
                        make_game(
                            "title",
                            status=national_statuses.get(
                                RoundKind.CHAMPIONSHIP, GameStatus.SCHEDULED
                            ),
                        )
                    ],
                ),
            ],
        )
    )
    return Tournament(id="ncaa-2026", name="NCAA Tournament", year=2026, regions=regions)


@pytest.fixture
def tournament() -> Tournament:
    return make_tournament()


def espn_competitor(
    team_id: str,
    name: str,
    home_away: str | None = None,
    seed: int | None = None,
    score: str | None = None,
    winner: bool | None = None,
) -> dict[str, Any]:
    competitor: dict[str, Any] = {
        "id": team_id,
        "team": {
            "id": team_id,
            "displayName": name,
            "shortDisplayName": name,
            "abbreviation": name[:4].upper(),
        },
    }
    if home_away is not None:
        competitor["homeAway"] = home_away
    if seed is not None:
        competitor["curatedRank"] = {"current": seed}
    if score is not None:
        competitor["score"] = score
    if winner is not None:
        competitor["winner"] = winner
    return competitor


def espn_event(
    event_id: str,
    status: str = "STATUS_SCHEDULED",
    competitors: list[dict[str, Any]] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    event: dict[str, Any] = {
        "id": event_id,
        "status": {"type": {"name": status}},
        "competitions": [{"competitors": competitors or []}],
    }
    event.update(extra)
    return event


def ncaa_team(
    team_id: str | None, name: str | None = None, seed: int | None = None, **extra: Any
) -> dict[str, Any]:
    team: dict[str, Any] = {"teamId": team_id, "name": name, "seed": seed}
    team.update(extra)
    return team


def ncaa_game(
    position: int, section: int, state: str = "P", teams: list[dict[str, Any]] | None = None
) -> dict[str, Any]:
    game: dict[str, Any] = {
        "bracketPositionId": position,
        "sectionId": section,
        "gameState": state,
    }
    if teams is not None:
        game["teams"] = teams
    return game
