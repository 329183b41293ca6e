from typing import List

import numpy as np

BLANK = " "
H_AXIS = "-"
V_AXIS = "|"
CROSS = "+"

AXIS_GLYPHS = frozenset((BLANK, H_AXIS, V_AXIS, CROSS))


class Grid:
    """Mutable character buffer shared by the drawing phases of one run."""

    def __init__(self, width: int, height: int):
        if width <= 1 or height <= 1:
            raise ValueError("grid width/height must be > 1")
        self.width = width
        self.height = height
        self.cells = np.full((height, width), BLANK, dtype="<U1")

    def __getitem__(self, pos):
        return self.cells[pos]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def put(self, row: int, col: int, glyph: str) -> bool:
        if not self.in_bounds(row, col):
            return False
        self.cells[row, col] = glyph
        return True

    def put_many(self, rows: np.ndarray, cols: np.ndarray, glyph: str) -> int:
        """Writes glyph at every in-bounds (row, col) pair; returns the number written."""
        keep = (rows >= 0) & (rows < self.height) & (cols >= 0) & (cols < self.width)
        self.cells[rows[keep], cols[keep]] = glyph
        return int(np.count_nonzero(keep))

    # --- Axis lines: crossings merge into '+' ---
    def draw_hline(self, row: int, glyph: str = H_AXIS) -> None:
        if row < 0 or row >= self.height:
            return
        line = self.cells[row]
        crossing = (line == V_AXIS) | (line == CROSS)
        line[:] = np.where(crossing, CROSS, glyph)

    def draw_vline(self, col: int, glyph: str = V_AXIS) -> None:
        if col < 0 or col >= self.width:
            return
        line = self.cells[:, col]
        crossing = (line == H_AXIS) | (line == CROSS)
        line[:] = np.where(crossing, CROSS, glyph)

    def rows(self) -> List[str]:
        return ["".join(row) for row in self.cells]
