"""Bracketwatch - a live NCAA tournament bracket viewer for the terminal."""

from .api import BracketAPI, ProviderChain
from .models import Tournament
from .ui.bracket_display import BracketDisplay

__version__ = "1.0.0"
__all__ = ["BracketAPI", "ProviderChain", "Tournament", "BracketDisplay"]
