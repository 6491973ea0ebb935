"""Data models for the bracket tree and the upstream wire formats."""

from .bracket import (
    BoxScore,
    Game,
    GameDetail,
    GameStatus,
    Play,
    PlayerLine,
    Region,
    Round,
    RoundKind,
    Team,
    TeamSeed,
    Tournament,
)

__all__ = [
    "BoxScore",
    "Game",
    "GameDetail",
    "GameStatus",
    "Play",
    "PlayerLine",
    "Region",
    "Round",
    "RoundKind",
    "Team",
    "TeamSeed",
    "Tournament",
]
