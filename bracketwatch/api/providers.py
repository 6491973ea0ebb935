"""Ordered bracket data sources and the chain that tries them in turn.

The chain is: local override file, primary NCAA bracket, ESPN tournaments
for each candidate year, and finally the embedded snapshot. A configured
override short-circuits the rest.
"""

import json
import re
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from ..config import FALLBACK_YEAR
from ..models.bracket import Tournament
from ..models.espn_api import TournamentEntry, TournamentsResponse
from ..utils.logging import log
from .client import BracketAPI
from .errors import BracketAPIError, NotFound, ParseFailure
from .normalize import normalize_championship, normalize_tournament_entry

_YEAR_TOKEN = re.compile(r"\d+")

SELECTION_KEYWORDS = ("ncaa", "march", "championship", "tournament")
EXCLUDED_KEYWORDS = ("nit", "invitational")


def season_year(now: datetime) -> int:
    """Championship year for the season in progress; Nov/Dec roll forward"""
    return now.year + 1 if now.month >= 11 else now.year


def candidate_years(now: datetime, fallback_year: int = FALLBACK_YEAR) -> list[int]:
    """Years to query, nearest to the season first, ties broken by the earlier year"""
    season = season_year(now)
    years = {season, season - 1, season + 1, fallback_year}
    return sorted(years, key=lambda year: (abs(year - season), year))


def infer_year(text: str) -> int | None:
    """First standalone 4-digit token in 2000..2100, if any"""
    for token in _YEAR_TOKEN.findall(text):
        if len(token) == 4 and 2000 <= int(token) <= 2100:
            return int(token)
    return None


def select_tournament_entry(entries: list[TournamentEntry], year: int) -> TournamentEntry:
    """Pick the men's tournament from ESPN's list of tournaments.

    Prefers a name that looks like the NCAA tournament (and not the NIT) with
    a non-empty bracket, then any entry with a non-empty bracket.
    """
    if not entries:
        raise NotFound(f"No tournaments returned for year {year}")

    def name_matches(entry: TournamentEntry) -> bool:
        name = (entry.name or "").lower()
        return any(word in name for word in SELECTION_KEYWORDS) and not any(
            word in name for word in EXCLUDED_KEYWORDS
        )

    for entry in entries:
        if entry.has_bracket and name_matches(entry):
            return entry
    for entry in entries:
        if entry.has_bracket:
            return entry
    raise NotFound(f"NCAA tournament bracket not found for year {year}")


def parse_tournaments_document(raw: dict, source: str) -> TournamentsResponse:
    try:
        return TournamentsResponse.model_validate(raw)
    except ValidationError as e:
        raise ParseFailure(f"Invalid tournament document: {e}", url=source) from e


class BracketSource(ABC):
    """One strategy in the provider chain"""

    name: str = "source"

    @abstractmethod
    async def load(self) -> Tournament:
        """Return a normalized bracket or raise a BracketAPIError subclass"""


class LocalOverrideSource(BracketSource):
    """Bracket read from a local file in the ESPN tournaments shape"""

    name = "local file"

    def __init__(self, path: str, now: datetime | None = None):
        self.path: str = path
        self.now: datetime = now or datetime.now(timezone.utc)

    async def load(self) -> Tournament:
        log(f"📁 Loading bracket override from {self.path}")
        try:
            content = Path(self.path).read_text(encoding="utf-8")
        except OSError as e:
            raise NotFound(f"Could not read {self.path}: {e}", url=self.path) from e
        try:
            raw = json.loads(content)
        except ValueError as e:
            raise ParseFailure(f"Invalid JSON: {e}", url=self.path) from e

        response = parse_tournaments_document(raw, self.path)
        year = infer_year(Path(self.path).name) or infer_year(self.path)
        entry = select_tournament_entry(
            response.tournaments or [], year or season_year(self.now)
        )
        if year is None:
            year = infer_year(entry.name or "") or season_year(self.now)
        return normalize_tournament_entry(entry, year)


class PrimarySource(BracketSource):
    """The henrygd NCAA bracket for the season year"""

    name = "NCAA bracket"

    def __init__(self, api: BracketAPI, year: int):
        self.api: BracketAPI = api
        self.year: int = year

    async def load(self) -> Tournament:
        response = await self.api.fetch_championship(self.year)
        if not response.championships or not response.championships[0].games:
            raise NotFound(f"No championship games for {self.year}")
        return normalize_championship(response.championships[0])


class SecondarySource(BracketSource):
    """ESPN tournament bracket for one candidate year"""

    name = "ESPN tournaments"

    def __init__(self, api: BracketAPI, year: int):
        self.api: BracketAPI = api
        self.year: int = year

    async def load(self) -> Tournament:
        response = await self.api.fetch_tournaments(self.year)
        entry = select_tournament_entry(response.tournaments or [], self.year)
        return normalize_tournament_entry(entry, self.year)


class EmbeddedSource(BracketSource):
    """The bundled 2025 snapshot; works offline"""

    name = "embedded snapshot"

    def __init__(self, year: int = FALLBACK_YEAR):
        self.year: int = year

    async def load(self) -> Tournament:
        from ..models.fallback_data import FALLBACK_BRACKET

        response = parse_tournaments_document(FALLBACK_BRACKET, "embedded")
        entry = select_tournament_entry(response.tournaments or [], self.year)
        return normalize_tournament_entry(entry, self.year)


class ProviderChain:
    """Try each source in order and return the first bracket that loads"""

    def __init__(self, sources: list[BracketSource]):
        self.sources: list[BracketSource] = sources
        self.last_error: BracketAPIError | None = None

    @classmethod
    def default(
        cls,
        api: BracketAPI | None = None,
        override_path: str | None = None,
        now: datetime | None = None,
    ) -> "ProviderChain":
        """Build the standard chain for "now".

        A configured override replaces the whole chain so its failure
        surfaces directly.
        """
        now = now or datetime.now(timezone.utc)
        if override_path:
            return cls([LocalOverrideSource(override_path, now)])

        api = api or BracketAPI()
        sources: list[BracketSource] = [PrimarySource(api, season_year(now))]
        sources.extend(SecondarySource(api, year) for year in candidate_years(now))
        sources.append(EmbeddedSource())
        return cls(sources)

    async def resolve(self) -> Tournament:
        self.last_error = None
        for source in self.sources:
            try:
                tournament = await source.load()
            except BracketAPIError as e:
                log(f"⚠️  {source.name} failed: {e}")
                self.last_error = e
                continue
            log(
                f"✅ Loaded {tournament.name} ({tournament.year}) from {source.name}"
            )
            return tournament

        if self.last_error is not None:
            raise self.last_error
        raise NotFound("NCAA Tournament not found in current/adjacent years")
