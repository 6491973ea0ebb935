"""Messages posted by fetch workers back to the application."""

from textual.message import Message

from ..models.bracket import Game, GameDetail, Tournament


class BracketLoaded(Message):
    """A full bracket load finished; the tree replaces the current one"""

    def __init__(self, tournament: Tournament) -> None:
        super().__init__()
        self.tournament = tournament


class ScoresUpdated(Message):
    """A scoreboard refresh returned games to patch by id"""

    def __init__(self, games: list[Game]) -> None:
        super().__init__()
        self.games = games


class GameDetailLoaded(Message):
    def __init__(self, detail: GameDetail) -> None:
        super().__init__()
        self.detail = detail


class FetchFailed(Message):
    """A fetch gave up; `kind` is "bracket", "scores" or "detail"."""

    def __init__(self, kind: str, error: str) -> None:
        super().__init__()
        self.kind = kind
        self.error = error
