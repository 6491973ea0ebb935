"""Render bracket regions, round lists and game details as rich Text."""

from rich.text import Text

from ..models.bracket import Game, GameDetail, GameStatus, Region, RoundKind, TeamSeed
from .layout import BracketGrid, connector_glyphs

WINNER_STYLE = "bold green"
SELECTED_STYLE = "bold reverse"
LIVE_STYLE = "bold yellow"
DIM_STYLE = "dim"
CONNECTOR_STYLE = "dim"


def orientation_for(region_index: int) -> tuple[bool, bool]:
    """(mirrored, flipped) for a region position: 0 normal, 1 mirrored, 2 flipped, 3 both"""
    position = region_index % 4
    return position in (1, 3), position in (2, 3)


def format_team_line(seed: TeamSeed, score: int | None, width: int) -> str:
    """Seed, name and score padded to exactly `width` characters"""
    seed_text = f"{seed.seed:2}" if seed.seed > 0 else "  "
    score_text = f"{score:3}" if score is not None else "   "
    name_width = max(width - 8, 0)
    name = seed.display_name[:name_width]
    line = f"{seed_text} {name:<{name_width}} {score_text} "
    return line[:width]


def format_status_line(game: Game, width: int) -> str:
    if game.status == GameStatus.SCHEDULED:
        if game.start_time is not None:
            raw = f" {game.start_time.astimezone().strftime('%I:%M %p')}"
        else:
            raw = " Scheduled"
    elif game.status == GameStatus.IN_PROGRESS:
        period = f"{game.period}H" if game.period else ""
        raw = f" {period} {game.clock or ''}"
    elif game.status == GameStatus.FINAL:
        raw = " FINAL"
    else:
        raw = " PPD"
    return f"{raw:<{width}}"[:width]


def game_rows(game: Game | None, width: int) -> list[str]:
    """The three rows of a game cell: top team, status, bottom team"""
    if game is None:
        return [" " * width] * 3
    top_score = game.score[0] if game.score else None
    bottom_score = game.score[1] if game.score else None
    return [
        format_team_line(game.top, top_score, width),
        format_status_line(game, width),
        format_team_line(game.bottom, bottom_score, width),
    ]


def row_styles(game: Game | None, selected: bool) -> list[str]:
    base = SELECTED_STYLE if selected else ""
    if game is None:
        return [base, base, base]
    status_style = LIVE_STYLE if game.is_live else DIM_STYLE
    return [
        f"{base} {WINNER_STYLE}".strip() if game.is_winner("top") else base,
        f"{base} {status_style}".strip(),
        f"{base} {WINNER_STYLE}".strip() if game.is_winner("bottom") else base,
    ]


class _Canvas:
    """Fixed-size character grid with styled spans"""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.rows: list[list[str]] = [[" "] * width for _ in range(height)]
        self.spans: list[list[tuple[int, int, str]]] = [[] for _ in range(height)]

    def put(self, row: int, col: int, text: str, style: str = "") -> None:
        if not 0 <= row < self.height:
            return
        for offset, char in enumerate(text):
            x = col + offset
            if 0 <= x < self.width:
                self.rows[row][x] = char
        end = min(col + len(text), self.width)
        if style and col < end:
            self.spans[row].append((max(col, 0), end, style))

    def to_text(self, first_row: int = 0, height: int | None = None) -> Text:
        last_row = self.height if height is None else min(first_row + height, self.height)
        text = Text(no_wrap=True, overflow="crop")
        for row in range(max(first_row, 0), last_row):
            line = Text("".join(self.rows[row]))
            for start, end, style in self.spans[row]:
                line.stylize(style, start, end)
            text.append_text(line)
            if row < last_row - 1:
                text.append("\n")
        return text


def render_region(
    region: Region,
    grid: BracketGrid,
    selected: tuple[int, int] | None = None,
    scroll_offset: int = 0,
    height: int | None = None,
) -> Text:
    """Draw a regional sub-bracket with connectors.

    `selected` is (depth, index) of the highlighted cell.
    """
    canvas = _Canvas(grid.total_width, grid.total_height)

    for glyph in connector_glyphs(grid):
        canvas.put(glyph.row, glyph.col, glyph.char, CONNECTOR_STYLE)

    for cell in grid.cells:
        round_ = region.round(RoundKind(RoundKind.FIRST + cell.depth))
        game = None
        if round_ is not None and cell.index < len(round_.games):
            game = round_.games[cell.index]
        is_selected = selected == (cell.depth, cell.index)
        for offset, (line, style) in enumerate(
            zip(game_rows(game, cell.width), row_styles(game, is_selected))
        ):
            canvas.put(cell.top_row + offset, cell.col, line, style)

    return canvas.to_text(scroll_offset, height)


def render_round_list(
    title: str, games: list[Game], selected_index: int | None, width: int
) -> Text:
    """Stacked game cells, used for First Four and the national rounds"""
    cell_width = max(min(width - 2, 30), 10)
    text = Text(no_wrap=True, overflow="crop")
    text.append(f"── {title} ──\n", style="bold")
    if not games:
        text.append("\n No games yet", style=DIM_STYLE)
        return text
    for index, game in enumerate(games):
        text.append("\n")
        for line, style in zip(
            game_rows(game, cell_width), row_styles(game, index == selected_index)
        ):
            text.append(" ")
            text.append(line, style=style or None)
            text.append("\n")
    return text


def render_game_detail(game: Game | None, detail: GameDetail | None, max_plays: int = 10) -> Text:
    """Side panel text for the selected game"""
    text = Text(no_wrap=False)
    if game is None:
        text.append("No game selected", style=DIM_STYLE)
        return text

    text.append(f"{game.top.display_name} vs {game.bottom.display_name}\n", style="bold")
    text.append(format_status_line(game, 24).strip() + "\n")
    if game.location:
        text.append(f"{game.location}\n", style=DIM_STYLE)
    if game.score:
        text.append(f"Score: {game.score[0]} - {game.score[1]}\n")

    if detail is None:
        if game.event_id is None:
            text.append("\nNo live feed for this game", style=DIM_STYLE)
        else:
            text.append("\nPress Enter for box score", style=DIM_STYLE)
        return text

    for label, box in (("Home", detail.home_box), ("Away", detail.away_box)):
        team_name = box.team.name if box.team else label
        text.append(f"\n{team_name}\n", style="bold")
        leaders = sorted(box.players, key=lambda p: p.points, reverse=True)[:5]
        for player in leaders:
            text.append(
                f" {player.name[:18]:<18} {player.points:>3}p {player.rebounds:>2}r "
                f"{player.assists:>2}a\n"
            )
        if box.totals is not None:
            text.append(f" {'TOTALS':<18} {box.totals.points:>3}p\n", style=DIM_STYLE)

    if detail.plays:
        text.append("\nRecent plays\n", style="bold")
        for play in detail.plays[-max_plays:]:
            text.append(
                f" {play.period}H {play.clock:>5} {play.away_score}-{play.home_score} "
                f"{play.description}\n"
            )
    return text
