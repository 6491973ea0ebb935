"""API module for bracket data fetching."""

from .client import BracketAPI
from .errors import ApiFailure, BracketAPIError, NetworkFailure, NotFound, ParseFailure
from .providers import ProviderChain

__all__ = [
    "BracketAPI",
    "ProviderChain",
    "BracketAPIError",
    "NetworkFailure",
    "ApiFailure",
    "ParseFailure",
    "NotFound",
]
