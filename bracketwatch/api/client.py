"""HTTP client for the NCAA and ESPN bracket endpoints."""

import asyncio
from typing import TypeVar

import aiohttp
from pydantic import BaseModel, ValidationError

from ..config import ESPN_SITE_V2, ESPN_V2, NCAA_HENRYGD, REQUEST_TIMEOUT, USER_AGENT
from ..models.bracket import Game, GameDetail
from ..models.espn_api import ScoreboardResponse, SummaryResponse, TournamentsResponse
from ..models.ncaa_api import NcaaBracketResponse
from ..utils.logging import log
from .errors import ApiFailure, NetworkFailure, ParseFailure
from .normalize import normalize_event, normalize_summary

ModelT = TypeVar("ModelT", bound=BaseModel)


class BracketAPI:
    """Handle API calls to the bracket, scoreboard and summary endpoints"""

    def __init__(
        self,
        ncaa_base_url: str = NCAA_HENRYGD,
        espn_base_url: str = ESPN_V2,
        espn_site_url: str = ESPN_SITE_V2,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.ncaa_base_url: str = ncaa_base_url
        self.espn_base_url: str = espn_base_url
        self.espn_site_url: str = espn_site_url
        self.timeout: float = timeout

    def championship_url(self, year: int) -> str:
        return f"{self.ncaa_base_url}/brackets/basketball-men/d1/{year}"

    def tournaments_url(self, year: int) -> str:
        return f"{self.espn_base_url}/tournaments?limit=25&year={year}"

    def scoreboard_url(self) -> str:
        # groups=100 limits the scoreboard to tournament games
        return f"{self.espn_site_url}/scoreboard?groups=100&limit=50"

    def summary_url(self, event_id: str) -> str:
        return f"{self.espn_site_url}/summary?event={event_id}"

    async def get_json(self, url: str, model: type[ModelT]) -> ModelT:
        """GET a URL and validate the body against a response model.

        Client errors (4xx) yield an empty default instance of the model.
        Other non-2xx statuses raise ApiFailure, transport problems raise
        NetworkFailure, and bodies that fail to decode or validate raise
        ParseFailure.
        """
        log(f"📡 GET {url}")
        try:
            async with aiohttp.ClientSession(
                headers={"User-Agent": USER_AGENT}
            ) as session:
                async with session.get(
                    url, timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as response:
                    log(f"📡 Response Status: {response.status}")

                    if 400 <= response.status < 500:
                        log(f"⚠️  Client error {response.status}, treating as empty")
                        return model()

                    if not 200 <= response.status < 300:
                        raise ApiFailure(
                            f"HTTP {response.status}", url=url, status=response.status
                        )

                    try:
                        raw_data = await response.json(content_type=None)
                    except ValueError as e:
                        raise ParseFailure(f"Invalid JSON: {e}", url=url) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            log(f"❌ Network error: {type(e).__name__}: {e}")
            raise NetworkFailure(f"{type(e).__name__}: {e}", url=url) from e

        try:
            return model.model_validate(raw_data)
        except ValidationError as e:
            log(f"❌ Failed to parse response: {e}")
            raise ParseFailure(f"Unexpected response shape: {e}", url=url) from e

    async def fetch_championship(self, year: int) -> NcaaBracketResponse:
        """Fetch the authoritative bracket from the henrygd NCAA API"""
        return await self.get_json(self.championship_url(year), NcaaBracketResponse)

    async def fetch_tournaments(self, year: int) -> TournamentsResponse:
        """Fetch ESPN's tournament list for a given year"""
        return await self.get_json(self.tournaments_url(year), TournamentsResponse)

    async def fetch_scoreboard(self) -> list[Game]:
        """Fetch live tournament games from the ESPN scoreboard"""
        raw = await self.get_json(self.scoreboard_url(), ScoreboardResponse)
        games = [normalize_event(event) for event in raw.events or []]
        log(f"✅ Scoreboard returned {len(games)} games")
        return games

    async def fetch_game_detail(self, event_id: str) -> GameDetail:
        """Fetch play-by-play and box score for one game"""
        raw = await self.get_json(self.summary_url(event_id), SummaryResponse)
        return normalize_summary(event_id, raw)
