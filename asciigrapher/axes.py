import logging
import math
from typing import List

from .grid import CROSS, Grid
from .viewport import Viewport

logger = logging.getLogger(__name__)


def tick_positions(vmin: float, vmax: float, step: float) -> List[float]:
    """Multiples of step in [vmin, vmax], starting from the smallest one >= vmin."""
    start = math.ceil(vmin / step)
    stop = math.floor(vmax / step)
    return [k * step for k in range(start, stop + 1)]


def draw_axes(grid: Grid, view: Viewport, show_ticks: bool = True) -> None:
    """Draws y=0 / x=0 axes and their tick marks. Must run before any curve."""
    if view.has_x_axis:
        grid.draw_hline(view.row_at_y(0))

    if view.has_y_axis:
        grid.draw_vline(view.col_at_x(0))

    if not show_ticks:
        return

    step = view.tick_interval()
    logger.debug("tick interval %g", step)

    # X ticks sit on the horizontal axis
    if view.has_x_axis:
        r0 = view.row_at_y(0)
        for xt in tick_positions(view.xmin, view.xmax, step):
            grid.put(r0, view.col_at_x(xt), CROSS)

    # Y ticks sit on the vertical axis
    if view.has_y_axis:
        c0 = view.col_at_x(0)
        for yt in tick_positions(view.ymin, view.ymax, step):
            grid.put(view.row_at_y(yt), c0, CROSS)
