from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Set, Tuple

from .components import Cell
from .constants import COLS, ROWS, TILE


@dataclass
class Grid:
    """Cell kinds indexed as cells[y][x]; w is the column count, h the row count."""

    w: int = COLS
    h: int = ROWS
    cells: List[List[Cell]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [[Cell.EMPTY for _ in range(self.w)] for _ in range(self.h)]

    @classmethod
    def from_rows(cls, rows: List[str]) -> "Grid":
        """Build from text rows: '#' wall, 'c' crate, anything else empty."""
        lookup = {"#": Cell.WALL, "c": Cell.CRATE}
        cells = [[lookup.get(ch, Cell.EMPTY) for ch in row] for row in rows]
        return cls(len(rows[0]), len(rows), cells)

    # --- Terrain ops ---
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.w and 0 <= y < self.h

    def cell_at(self, x: int, y: int) -> Optional[Cell]:
        """Cell kind at (x, y), or None off the board."""
        if not self.in_bounds(x, y):
            return None
        return self.cells[y][x]

    def set_cell(self, x: int, y: int, kind: Cell) -> None:
        self.cells[y][x] = kind

    def is_empty(self, x: int, y: int) -> bool:
        return self.cell_at(x, y) is Cell.EMPTY

    def is_border(self, x: int, y: int) -> bool:
        return x == 0 or y == 0 or x == self.w - 1 or y == self.h - 1

    def destroy_crate(self, x: int, y: int) -> bool:
        """Crate -> Empty. Returns True if a crate was there; walls and off-board cells are untouched."""
        if self.cell_at(x, y) is not Cell.CRATE:
            return False
        self.cells[y][x] = Cell.EMPTY
        return True

    # --- Queries ---
    def cells_of(self, kind: Cell) -> Iterator[Tuple[int, int]]:
        for y, row in enumerate(self.cells):
            for x, cell in enumerate(row):
                if cell is kind:
                    yield x, y

    def diff(self, other: "Grid") -> Set[Tuple[int, int]]:
        """Coordinates whose cell kind differs between two grids of the same size."""
        return {
            (x, y)
            for y in range(self.h)
            for x in range(self.w)
            if self.cells[y][x] is not other.cells[y][x]
        }

    def copy(self) -> "Grid":
        return Grid(self.w, self.h, [list(row) for row in self.cells])

    # --- Utilities ---
    def map_pixel_size(self) -> Tuple[int, int]:
        return self.w * TILE, self.h * TILE
