import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import numpy as np

from .config import PlotConfig
from .errors import ConfigError

logger = logging.getLogger(__name__)

Number = Union[float, np.ndarray]


def nice_tick(rough: float) -> float:
    """Rounds a raw tick interval to 1, 2, 5 or 10 times a power of ten."""
    if not math.isfinite(rough) or rough <= 0:
        raise ValueError(f"tick interval estimate must be a positive number, got {rough}")
    power = 10 ** math.floor(math.log10(rough))
    base = rough / power
    if base <= 1.5:
        return 1 * power
    if base <= 3:
        return 2 * power
    if base <= 7:
        return 5 * power
    return 10 * power


def _round_half_up(v: Number) -> Number:
    # Halves round towards +inf, np.rint would round them to even
    return np.floor(np.asarray(v, dtype=float) + 0.5)


@dataclass(frozen=True)
class Viewport:
    xmin: float
    xmax: float
    ymin: float
    ymax: float
    width: int
    height: int

    @classmethod
    def from_config(cls, config: PlotConfig) -> "Viewport":
        """Validates the base rectangle, then applies zoom followed by pan."""
        x_range = config.xmax - config.xmin
        y_range = config.ymax - config.ymin
        if not (x_range > 0 and y_range > 0) or not all(
                math.isfinite(v) for v in (config.xmin, config.xmax, config.ymin, config.ymax)):
            raise ConfigError("Viewport must have xmax>xmin and ymax>ymin.")

        zoom = config.effective_zoom
        x_mid = (config.xmin + config.xmax) / 2
        y_mid = (config.ymin + config.ymax) / 2
        x_half = x_range / (2 * zoom)
        y_half = y_range / (2 * zoom)

        view = cls(
            xmin=x_mid - x_half + config.panx,
            xmax=x_mid + x_half + config.panx,
            ymin=y_mid - y_half + config.pany,
            ymax=y_mid + y_half + config.pany,
            width=config.grid_width,
            height=config.grid_height,
        )
        if not (view.x_span > 0 and view.y_span > 0) or not math.isfinite(view.x_span + view.y_span):
            raise ConfigError("Viewport must have xmax>xmin and ymax>ymin.")
        logger.debug("viewport x:[%g, %g] y:[%g, %g] grid %dx%d",
                     view.xmin, view.xmax, view.ymin, view.ymax, view.width, view.height)
        return view

    @property
    def x_span(self) -> float:
        return self.xmax - self.xmin

    @property
    def y_span(self) -> float:
        return self.ymax - self.ymin

    @property
    def shape(self) -> Tuple[int, int]:
        return self.height, self.width

    # --- World <-> Grid ---
    def x_at_col(self, col: Number) -> Number:
        return self.xmin + (col / (self.width - 1)) * self.x_span

    def y_at_row(self, row: Number) -> Number:
        # Row 0 is the top of the screen (ymax)
        return self.ymax - (row / (self.height - 1)) * self.y_span

    def col_at_x(self, x: Number) -> Number:
        col = _round_half_up((x - self.xmin) / self.x_span * (self.width - 1))
        return int(col) if np.ndim(col) == 0 else col.astype(np.int64)

    def row_at_y(self, y: Number) -> Number:
        row = _round_half_up((self.ymax - y) / self.y_span * (self.height - 1))
        return int(row) if np.ndim(row) == 0 else row.astype(np.int64)

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def cell_at(self, x: float, y: float) -> Optional[Tuple[int, int]]:
        """(row, col) of the cell nearest to (x, y), or None when it falls off the grid."""
        col_f = (x - self.xmin) / self.x_span * (self.width - 1)
        row_f = (self.ymax - y) / self.y_span * (self.height - 1)
        if not (math.isfinite(col_f) and math.isfinite(row_f)):
            return None
        row, col = math.floor(row_f + 0.5), math.floor(col_f + 0.5)
        return (row, col) if self.contains(row, col) else None

    # --- Ticks ---
    def tick_interval(self) -> float:
        return nice_tick(min(self.x_span, self.y_span) / 10)

    @property
    def has_x_axis(self) -> bool:
        """The horizontal axis (y = 0) is visible."""
        return self.ymin < 0 < self.ymax

    @property
    def has_y_axis(self) -> bool:
        """The vertical axis (x = 0) is visible."""
        return self.xmin < 0 < self.xmax
