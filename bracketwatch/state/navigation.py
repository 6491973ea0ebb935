"""Cursor state for walking the bracket: round, region, game and scroll."""

from ..models.bracket import Game, GameStatus, Region, Round, RoundKind, Tournament
from ..ui.layout import GAME_HEIGHT


def detect_active_round(tournament: Tournament) -> RoundKind:
    """The first round with a live game, else the latest round with a final."""
    latest_final = RoundKind.FIRST
    for kind in RoundKind:
        games = [
            game
            for region in tournament.regions
            for round_ in region.rounds
            if round_.kind == kind
            for game in round_.games
        ]
        if any(game.status == GameStatus.IN_PROGRESS for game in games):
            return kind
        if any(game.status == GameStatus.FINAL for game in games):
            latest_final = kind
    return latest_final


class BracketNavigator:
    """Owns the loaded tournament and the selection cursor over it"""

    def __init__(self):
        self.tournament: Tournament | None = None
        # Auto-detected from game statuses; drives the initial view
        self.current_round: RoundKind = RoundKind.FIRST
        # The round the user is looking at
        self.view_round: RoundKind = RoundKind.FIRST
        # Index into the non-National regions; ignored for Final Four rounds
        self.region_index: int = 0
        self.game_index: int = 0
        self.scroll_offset: int = 0

    def load(self, tournament: Tournament) -> None:
        """Replace the tournament and reset the cursor to the active round"""
        self.tournament = tournament
        self.current_round = detect_active_round(tournament)
        self.view_round = self.current_round
        self.region_index = 0
        self.game_index = 0
        self.scroll_offset = 0

    def merge_updates(self, games: list[Game]) -> int:
        """Patch games by id; the cursor is left where it is"""
        if self.tournament is None:
            return 0
        merged = self.tournament.merge_updates(games)
        self.current_round = detect_active_round(self.tournament)
        return merged

    def _reset_selection(self) -> None:
        self.game_index = 0
        self.scroll_offset = 0

    def next_round(self) -> None:
        following = self.view_round.next()
        if following is not None:
            self.view_round = following
            self._reset_selection()

    def prev_round(self) -> None:
        previous = self.view_round.prev()
        if previous is not None:
            self.view_round = previous
            self._reset_selection()

    def game_down(self) -> None:
        if self.game_index < self.games_in_view() - 1:
            self.game_index += 1

    def game_up(self) -> None:
        if self.game_index > 0:
            self.game_index -= 1

    def region_count(self) -> int:
        if self.tournament is None:
            return 0
        return len(self.tournament.bracket_regions())

    def cycle_region(self) -> None:
        if self.view_round.is_final_four:
            return
        self.region_index = (self.region_index + 1) % max(self.region_count(), 1)
        self._reset_selection()

    def selected_region(self) -> Region | None:
        """The region the cursor resolves to (National for Final Four rounds)"""
        if self.tournament is None:
            return None
        if self.view_round.is_final_four:
            return self.tournament.national()
        regions = self.tournament.bracket_regions()
        if 0 <= self.region_index < len(regions):
            return regions[self.region_index]
        return None

    def selected_round(self) -> Round | None:
        region = self.selected_region()
        if region is None:
            return None
        return region.round(self.view_round)

    def games_in_view(self) -> int:
        round_ = self.selected_round()
        return len(round_.games) if round_ else 0

    def selected_game(self) -> Game | None:
        round_ = self.selected_round()
        if round_ is None or not 0 <= self.game_index < len(round_.games):
            return None
        return round_.games[self.game_index]

    def selected_game_id(self) -> str | None:
        game = self.selected_game()
        return game.id if game else None

    def ensure_visible(self, center_row: int, viewport_height: int) -> None:
        """Scroll so the 3-row cell centered on `center_row` fits the viewport"""
        if viewport_height <= 0:
            return
        top = center_row - GAME_HEIGHT // 2
        bottom = center_row + GAME_HEIGHT // 2
        if top < self.scroll_offset:
            self.scroll_offset = max(top, 0)
        elif bottom >= self.scroll_offset + viewport_height:
            self.scroll_offset = bottom - viewport_height + 1
