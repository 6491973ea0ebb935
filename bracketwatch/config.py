"""Runtime configuration: endpoints, tuning constants and environment settings."""

import os

from pydantic import BaseModel

NCAA_HENRYGD = "https://ncaa-api.henrygd.me"
ESPN_V2 = "https://site.api.espn.com/apis/v2/sports/basketball/mens-college-basketball"
ESPN_SITE_V2 = (
    "https://site.api.espn.com/apis/site/v2/sports/basketball/mens-college-basketball"
)

USER_AGENT = "bracketwatch/1.0"
REQUEST_TIMEOUT = 10.0

# Year of the embedded snapshot, always tried as a last candidate year
FALLBACK_YEAR = 2025

# Primary source section id reserved for the semifinal/final games
NATIONAL_SECTION = 6
CANONICAL_REGIONS = ("East", "West", "South", "Midwest")

DEFAULT_POLL_INTERVAL = 30.0
MAX_CELL_WIDTH = 22
CONNECTOR_WIDTH = 3

BRACKET_JSON_ENV = "BRACKETWATCH_BRACKET_JSON"
POLL_INTERVAL_ENV = "BRACKETWATCH_POLL_INTERVAL"


class Settings(BaseModel):
    """Settings resolved from the environment, overridable from the CLI"""

    bracket_json: str | None = None
    poll_interval: float = DEFAULT_POLL_INTERVAL
    demo: bool = False

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        bracket_json = env.get(BRACKET_JSON_ENV, "").strip() or None
        poll_interval = DEFAULT_POLL_INTERVAL
        raw_interval = env.get(POLL_INTERVAL_ENV, "").strip()
        if raw_interval:
            try:
                poll_interval = float(raw_interval)
            except ValueError:
                poll_interval = DEFAULT_POLL_INTERVAL
            if poll_interval <= 0:
                poll_interval = DEFAULT_POLL_INTERVAL
        return cls(bracket_json=bracket_json, poll_interval=poll_interval)

    def merged(
        self,
        bracket_json: str | None = None,
        poll_interval: float | None = None,
        demo: bool = False,
    ) -> "Settings":
        """Return a copy with any explicitly passed values taking precedence"""
        return self.model_copy(
            update={
                "bracket_json": bracket_json or self.bracket_json,
                "poll_interval": (
                    poll_interval if poll_interval is not None else self.poll_interval
                ),
                "demo": demo or self.demo,
            }
        )
