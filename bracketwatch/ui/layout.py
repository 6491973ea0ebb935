"""Geometry for one regional sub-bracket (First round through Elite Eight).

Pure functions: given a pane width and orientation, compute where each of the
15 game cells sits and which connector glyphs join them. Rows are bracket
rows (0..30); columns are character offsets from the left of the pane.
"""

from dataclasses import dataclass, field

from ..config import CONNECTOR_WIDTH, MAX_CELL_WIDTH

GAME_HEIGHT = 3
# Slot height per depth: SH(0) = 3, SH(d) = 2 * SH(d - 1) + 1
SLOT_HEIGHTS = (3, 7, 15, 31)
REGION_HEIGHT = SLOT_HEIGHTS[-1]
GAMES_PER_DEPTH = (8, 4, 2, 1)
DEPTHS = len(GAMES_PER_DEPTH)
# Index of the first cell of each depth in BracketGrid.cells
_DEPTH_OFFSETS = (0, 8, 12, 14, 15)


@dataclass(frozen=True)
class GameCell:
    """Position of one game: its 3-row box is centered on center_row"""

    depth: int
    index: int
    col: int
    center_row: int
    width: int
    draw_outbound_connector: bool = True

    @property
    def top_row(self) -> int:
        return self.center_row - 1

    @property
    def bottom_row(self) -> int:
        return self.center_row + 1


@dataclass(frozen=True)
class ConnectorGlyph:
    row: int
    col: int
    char: str


@dataclass
class BracketGrid:
    """Cell positions for a region, depth-major (8 + 4 + 2 + 1 cells)"""

    cell_width: int
    connector_width: int
    round_cols: list[int]
    mirrored: bool
    flipped: bool
    cells: list[GameCell] = field(default_factory=list)

    @property
    def total_height(self) -> int:
        return REGION_HEIGHT

    @property
    def total_width(self) -> int:
        return (DEPTHS - 1) * (self.cell_width + self.connector_width) + self.cell_width

    def cells_for_depth(self, depth: int) -> list[GameCell]:
        return self.cells[_DEPTH_OFFSETS[depth] : _DEPTH_OFFSETS[depth + 1]]

    def cell_for(self, depth: int, index: int) -> GameCell | None:
        cells = self.cells_for_depth(depth)
        if 0 <= index < len(cells):
            return cells[index]
        return None


def center_row(depth: int, index: int) -> int:
    """Unflipped center row of game `index` at `depth`.

    Consecutive games at a depth are SH(d + 1) - SH(d) rows apart, which puts
    every parent exactly between its two children.
    """
    if depth == DEPTHS - 1:
        return SLOT_HEIGHTS[depth] // 2
    spacing = SLOT_HEIGHTS[depth + 1] - SLOT_HEIGHTS[depth]
    return SLOT_HEIGHTS[depth] // 2 + index * spacing


def cell_width_for(
    width: int,
    max_cell_width: int = MAX_CELL_WIDTH,
    connector_width: int = CONNECTOR_WIDTH,
) -> int:
    per_column = max(width - (DEPTHS - 1) * connector_width, 0) // DEPTHS
    return min(max(per_column, 1), max_cell_width)


def compute_grid(
    width: int,
    mirrored: bool = False,
    flipped: bool = False,
    max_cell_width: int = MAX_CELL_WIDTH,
    connector_width: int = CONNECTOR_WIDTH,
) -> BracketGrid:
    """Lay out the 15 cells of a region for a pane `width` characters wide.

    Mirrored puts the first round in the rightmost column; flipped reflects
    rows (row -> 30 - row).
    """
    cell_width = cell_width_for(width, max_cell_width, connector_width)
    stride = cell_width + connector_width
    round_cols = [depth * stride for depth in range(DEPTHS)]
    if mirrored:
        round_cols.reverse()

    grid = BracketGrid(
        cell_width=cell_width,
        connector_width=connector_width,
        round_cols=round_cols,
        mirrored=mirrored,
        flipped=flipped,
    )
    for depth, count in enumerate(GAMES_PER_DEPTH):
        for index in range(count):
            row = center_row(depth, index)
            if flipped:
                row = REGION_HEIGHT - 1 - row
            grid.cells.append(
                GameCell(
                    depth=depth,
                    index=index,
                    col=round_cols[depth],
                    center_row=row,
                    width=cell_width,
                    draw_outbound_connector=depth < DEPTHS - 1,
                )
            )
    return grid


def connector_glyphs(grid: BracketGrid) -> list[ConnectorGlyph]:
    """Box-drawing glyphs joining each pair of children to their parent.

    Normal orientation, connector zone right of the child column:

        child_top  ─┐
                    │
        parent     ─├─
                    │
        child_bot  ─┘

    Mirrored uses ┌ ┤ └ with the stubs on the opposite side.
    """
    glyphs: list[ConnectorGlyph] = []
    for depth in range(DEPTHS - 1):
        children = grid.cells_for_depth(depth)
        parents = grid.cells_for_depth(depth + 1)
        if grid.mirrored:
            base = grid.round_cols[depth] - grid.connector_width
        else:
            base = grid.round_cols[depth] + grid.cell_width
        col_a, col_b, col_c = base, base + 1, base + 2

        for j, parent in enumerate(parents):
            pair = [children[2 * j], children[2 * j + 1]]
            top, bottom = sorted(pair, key=lambda cell: cell.center_row)
            r_top, r_mid, r_bot = top.center_row, parent.center_row, bottom.center_row

            if grid.mirrored:
                glyphs.append(ConnectorGlyph(r_top, col_b, "┌"))
                glyphs.append(ConnectorGlyph(r_top, col_c, "─"))
                glyphs.append(ConnectorGlyph(r_mid, col_a, "─"))
                glyphs.append(ConnectorGlyph(r_mid, col_b, "┤"))
                glyphs.append(ConnectorGlyph(r_bot, col_b, "└"))
                glyphs.append(ConnectorGlyph(r_bot, col_c, "─"))
            else:
                glyphs.append(ConnectorGlyph(r_top, col_a, "─"))
                glyphs.append(ConnectorGlyph(r_top, col_b, "┐"))
                glyphs.append(ConnectorGlyph(r_mid, col_a, "─"))
                glyphs.append(ConnectorGlyph(r_mid, col_b, "├"))
                glyphs.append(ConnectorGlyph(r_mid, col_c, "─"))
                glyphs.append(ConnectorGlyph(r_bot, col_a, "─"))
                glyphs.append(ConnectorGlyph(r_bot, col_b, "┘"))

            for row in range(r_top + 1, r_bot):
                if row != r_mid:
                    glyphs.append(ConnectorGlyph(row, col_b, "│"))
    return glyphs
