"""Pydantic models for the henrygd NCAA bracket API responses."""

from typing import List, Optional

from .bracket import DictCompatibleBaseModel


class NcaaTeam(DictCompatibleBaseModel):
    """A team entry on a bracket game (may be a placeholder before announcement)"""

    teamId: Optional[str] = None
    name: Optional[str] = None
    shortName: Optional[str] = None
    seed: Optional[int] = None
    winner: Optional[bool] = None
    description: Optional[str] = None


class NcaaGame(DictCompatibleBaseModel):
    """A bracket game; bracketPositionId // 100 is the round number"""

    bracketPositionId: int
    victorBracketPositionId: Optional[int] = None
    contestId: Optional[int] = None
    gameState: str = ""
    teams: List[NcaaTeam] = []
    sectionId: int
    startDate: str = ""
    startTime: str = ""


class NcaaRound(DictCompatibleBaseModel):
    id: str = ""
    roundNumber: int = 0
    label: str = ""
    subtitle: str = ""


class NcaaRegion(DictCompatibleBaseModel):
    """Region metadata; title is empty until regions are assigned"""

    id: str = ""
    sectionId: int
    title: str = ""
    regionCode: str = ""


class NcaaChampionship(DictCompatibleBaseModel):
    title: str = ""
    year: int = 0
    games: List[NcaaGame] = []
    rounds: List[NcaaRound] = []
    regions: List[NcaaRegion] = []


class NcaaBracketResponse(DictCompatibleBaseModel):
    """Top-level bracket response"""

    championships: List[NcaaChampionship] = []
