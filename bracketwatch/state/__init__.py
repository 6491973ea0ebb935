"""Selection and navigation state."""

from .navigation import BracketNavigator, detect_active_round

__all__ = ["BracketNavigator", "detect_active_round"]
