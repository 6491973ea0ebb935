"""Main bracket viewer TUI application."""

import traceback
from datetime import datetime
from typing import ClassVar

from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding, BindingType
from textual.containers import Horizontal
from textual.reactive import reactive
from textual.widgets import Footer, Header, Static

from ..api.client import BracketAPI
from ..api.errors import BracketAPIError
from ..api.providers import EmbeddedSource, ProviderChain
from ..config import Settings
from ..models.bracket import GameDetail, RoundKind
from ..state.navigation import BracketNavigator
from ..utils.logging import log, set_console_logging
from .bracket_view import (
    orientation_for,
    render_game_detail,
    render_region,
    render_round_list,
)
from .layout import compute_grid
from .messages import BracketLoaded, FetchFailed, GameDetailLoaded, ScoresUpdated


class BracketDisplay(App[None]):
    """Live tournament bracket viewer"""

    CSS: ClassVar[str] = """
    Screen {
        layout: vertical;
    }

    Header {
        dock: top;
        height: 1;
        background: $primary;
        color: $text;
    }

    Footer {
        dock: bottom;
        height: 1;
        background: $primary-darken-1;
    }

    #context-bar {
        height: 1;
        background: $primary-darken-2;
        color: $text;
        padding: 0 1;
    }

    #error-bar {
        height: 1;
        background: $error 40%;
        color: $text;
        padding: 0 1;
        display: none;
    }

    #main-container {
        height: 1fr;
    }

    #bracket-pane {
        width: 1fr;
        height: 1fr;
        padding: 0 1;
    }

    #detail-pane {
        width: 40;
        height: 1fr;
        border-left: solid $primary;
        padding: 0 1;
        overflow-y: auto;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("h", "prev_round", "Prev round"),
        Binding("l", "next_round", "Next round"),
        Binding("left", "prev_round", "Prev round", show=False),
        Binding("right", "next_round", "Next round", show=False),
        Binding("j", "game_down", "Down"),
        Binding("k", "game_up", "Up"),
        Binding("down", "game_down", "Down", show=False),
        Binding("up", "game_up", "Up", show=False),
        Binding("r", "cycle_region", "Region"),
        Binding("enter", "show_detail", "Detail"),
        Binding("u", "refresh", "Refresh"),
        Binding("escape", "dismiss_error", "Dismiss", show=False),
        Binding("q", "quit", "Quit"),
    ]

    # Reactive variables
    last_update: reactive[str] = reactive("")
    error_message: reactive[str] = reactive("")

    def __init__(
        self,
        settings: Settings | None = None,
        api: BracketAPI | None = None,
    ):
        super().__init__()
        self.settings: Settings = settings or Settings.from_env()
        self.api: BracketAPI = api or BracketAPI()
        self.navigator: BracketNavigator = BracketNavigator()
        self.detail: GameDetail | None = None
        self.title = "Loading Bracket..."
        log(
            "🎯 BracketDisplay initialized with "
            f"override: {self.settings.bracket_json}, demo: {self.settings.demo}, "
            f"poll_interval: {self.settings.poll_interval}"
        )

    def compose(self) -> ComposeResult:
        """Create the UI layout"""
        yield Header()
        yield Static("", id="context-bar")
        yield Static("", id="error-bar")
        yield Horizontal(
            Static("", id="bracket-pane"),
            Static("", id="detail-pane"),
            id="main-container",
        )
        yield Footer()

    def on_mount(self) -> None:
        """Initialize the app"""
        set_console_logging(False)

        log("🏁 on_mount() called")
        self.show_loading_state()

        if not self.settings.demo:
            self.set_interval(self.settings.poll_interval, self.refresh_scores)

        log("🚀 Starting initial bracket load...")
        self.load_bracket()

    def show_loading_state(self) -> None:
        self.query_one("#context-bar", Static).update("Fetching bracket...")
        self.query_one("#bracket-pane", Static).update(
            "🔄 Loading tournament bracket, please wait."
        )

    def build_chain(self) -> ProviderChain:
        if self.settings.demo:
            return ProviderChain([EmbeddedSource()])
        return ProviderChain.default(self.api, self.settings.bracket_json)

    # Workers

    @work(exclusive=True, group="bracket")
    async def load_bracket(self) -> None:
        """Resolve a full bracket through the provider chain (async worker)"""
        log("🔄 load_bracket() STARTED")
        try:
            tournament = await self.build_chain().resolve()
        except BracketAPIError as e:
            log(f"❌ Bracket load failed: {e}")
            self.post_message(FetchFailed("bracket", str(e)))
            return
        except Exception as e:
            log(f"❌ Exception in load_bracket: {type(e).__name__}: {e}")
            log(f"❌ Full traceback: {traceback.format_exc()}")
            self.post_message(FetchFailed("bracket", f"{type(e).__name__}: {e}"))
            return
        self.post_message(BracketLoaded(tournament))

    @work(exclusive=True, group="scores")
    async def refresh_scores(self) -> None:
        """Fetch live scores; falls back to a full load when no bracket is loaded yet"""
        if self.navigator.tournament is None:
            log("🔄 No bracket yet, retrying full load")
            self.load_bracket()
            return

        log("🔄 refresh_scores() STARTED")
        try:
            games = await self.api.fetch_scoreboard()
        except BracketAPIError as e:
            log(f"❌ Score refresh failed: {e}")
            self.post_message(FetchFailed("scores", str(e)))
            return
        except Exception as e:
            log(f"❌ Exception in refresh_scores: {type(e).__name__}: {e}")
            log(f"❌ Full traceback: {traceback.format_exc()}")
            self.post_message(FetchFailed("scores", f"{type(e).__name__}: {e}"))
            return
        self.post_message(ScoresUpdated(games))

    @work(exclusive=True, group="detail")
    async def load_game_detail(self, event_id: str) -> None:
        log(f"🔄 load_game_detail({event_id}) STARTED")
        try:
            detail = await self.api.fetch_game_detail(event_id)
        except BracketAPIError as e:
            log(f"❌ Detail fetch failed: {e}")
            self.post_message(FetchFailed("detail", str(e)))
            return
        except Exception as e:
            log(f"❌ Exception in load_game_detail: {type(e).__name__}: {e}")
            log(f"❌ Full traceback: {traceback.format_exc()}")
            self.post_message(FetchFailed("detail", f"{type(e).__name__}: {e}"))
            return
        self.post_message(GameDetailLoaded(detail))

    # Worker results

    @on(BracketLoaded)
    def handle_bracket_loaded(self, message: BracketLoaded) -> None:
        tournament = message.tournament
        self.navigator.load(tournament)
        self.detail = None
        self.error_message = ""
        self.title = tournament.name
        self.last_update = datetime.now().strftime("%H:%M:%S")
        log(
            f"✅ Bracket loaded: {len(tournament.regions)} regions, "
            f"active round {self.navigator.current_round.label}"
        )
        self.refresh_view()

    @on(ScoresUpdated)
    def handle_scores_updated(self, message: ScoresUpdated) -> None:
        merged = self.navigator.merge_updates(message.games)
        self.last_update = datetime.now().strftime("%H:%M:%S")
        log(f"✅ Scores merged: {merged} of {len(message.games)} games matched")
        self.refresh_view()

    @on(GameDetailLoaded)
    def handle_game_detail_loaded(self, message: GameDetailLoaded) -> None:
        game = self.navigator.selected_game()
        if game is None or game.event_id != message.detail.game_id:
            log(f"⚠️  Dropping detail for {message.detail.game_id}, selection moved")
            return
        self.detail = message.detail
        self.refresh_detail()

    @on(FetchFailed)
    def handle_fetch_failed(self, message: FetchFailed) -> None:
        # Keep showing the last good bracket
        self.last_update = f"Error at {datetime.now().strftime('%H:%M:%S')}"
        self.error_message = f"⚠️  {message.kind} fetch failed: {message.error} (Esc to dismiss)"
        if self.navigator.tournament is None:
            self.query_one("#bracket-pane", Static).update(
                "❌ Could not load a bracket. Will retry on the next refresh."
            )

    def watch_error_message(self, message: str) -> None:
        try:
            error_bar = self.query_one("#error-bar", Static)
        except Exception:
            return
        error_bar.update(message)
        error_bar.display = bool(message)

    def watch_last_update(self, value: str) -> None:
        self.sub_title = f"Updated {value}" if value else ""

    # Rendering

    def on_resize(self) -> None:
        self.refresh_view()

    def context_line(self) -> str:
        tournament = self.navigator.tournament
        if tournament is None:
            return "No bracket loaded"
        region = self.navigator.selected_region()
        region_name = region.name if region else "-"
        parts = [
            f"{tournament.name} {tournament.year}",
            self.navigator.view_round.label,
            region_name,
        ]
        if self.navigator.current_round != self.navigator.view_round:
            parts.append(f"live: {self.navigator.current_round.label}")
        return " | ".join(parts)

    def refresh_view(self) -> None:
        """Redraw the context bar, bracket pane and detail pane"""
        if self.navigator.tournament is None:
            return
        try:
            context_bar = self.query_one("#context-bar", Static)
            pane = self.query_one("#bracket-pane", Static)
        except Exception as e:
            log(f"⚠️  Could not refresh view: {e}")
            return

        context_bar.update(self.context_line())

        width = pane.content_size.width or max(self.size.width - 44, 20)
        height = pane.content_size.height or max(self.size.height - 4, 1)
        view_round = self.navigator.view_round
        round_ = self.navigator.selected_round()

        if view_round.depth is not None:
            region = self.navigator.selected_region()
            if region is None:
                pane.update("No regions in this bracket")
            else:
                mirrored, flipped = orientation_for(self.navigator.region_index)
                grid = compute_grid(width, mirrored=mirrored, flipped=flipped)
                cell = grid.cell_for(view_round.depth, self.navigator.game_index)
                if cell is not None:
                    self.navigator.ensure_visible(cell.center_row, height)
                pane.update(
                    render_region(
                        region,
                        grid,
                        selected=(view_round.depth, self.navigator.game_index),
                        scroll_offset=self.navigator.scroll_offset,
                        height=height,
                    )
                )
        else:
            games = round_.games if round_ else []
            title = view_round.label
            if view_round == RoundKind.FIRST_FOUR:
                region = self.navigator.selected_region()
                title = f"{title} ({region.name})" if region else title
            pane.update(render_round_list(title, games, self.navigator.game_index, width))

        self.refresh_detail()

    def refresh_detail(self) -> None:
        try:
            detail_pane = self.query_one("#detail-pane", Static)
        except Exception:
            return
        game = self.navigator.selected_game()
        detail = self.detail
        if detail is not None and (game is None or game.event_id != detail.game_id):
            detail = None
        detail_pane.update(render_game_detail(game, detail))

    # Actions

    def _after_move(self) -> None:
        self.detail = None
        self.refresh_view()

    def action_prev_round(self) -> None:
        self.navigator.prev_round()
        self._after_move()

    def action_next_round(self) -> None:
        self.navigator.next_round()
        self._after_move()

    def action_game_down(self) -> None:
        self.navigator.game_down()
        self._after_move()

    def action_game_up(self) -> None:
        self.navigator.game_up()
        self._after_move()

    def action_cycle_region(self) -> None:
        self.navigator.cycle_region()
        self._after_move()

    def action_show_detail(self) -> None:
        game = self.navigator.selected_game()
        if game is None:
            return
        if game.event_id is None:
            self.notify("No live feed for this game")
            return
        self.load_game_detail(game.event_id)

    def action_refresh(self) -> None:
        """Manually refresh scores"""
        log("🔄 Manual refresh triggered")
        if self.settings.demo:
            self.notify("Demo mode: showing the embedded bracket")
            return
        self.refresh_scores()
        self.notify("Refreshing scores...")

    def action_dismiss_error(self) -> None:
        self.error_message = ""

    def on_unmount(self) -> None:
        """Clean up when app is unmounted"""
        self._cleanup_terminal()

    def _cleanup_terminal(self) -> None:
        """Ensure terminal state is properly restored"""
        try:
            import sys

            # Force disable mouse tracking and restore cursor
            sys.stdout.write(
                "\033[?1000l\033[?1003l\033[?1015l\033[?1006l\033[?25h\033[?1004l"
            )
            sys.stdout.flush()
        except Exception:
            pass

    async def action_quit(self):
        """Quit the application"""
        self._cleanup_terminal()
        self.exit()
