import logging

import numpy as np
from colorama import Fore

from .expression import CompiledExpression
from .grid import Grid
from .viewport import Viewport

logger = logging.getLogger(__name__)

OVERSAMPLE = 8
IMPLICIT_EPS_RATIO = 0.02
PLOT_VARIABLES = frozenset(("x", "y"))

# One color per expression slot, cycled by index
PALETTE = (Fore.RED, Fore.GREEN, Fore.BLUE, Fore.MAGENTA, Fore.CYAN, Fore.YELLOW)


def marker_for(index: int, chars: str) -> str:
    return chars[index % len(chars)]


def color_for(index: int) -> str:
    return PALETTE[index % len(PALETTE)]


def implicit_epsilon(view: Viewport) -> float:
    return IMPLICIT_EPS_RATIO * min(view.x_span, view.y_span)


def plot_explicit(grid: Grid, view: Viewport, compiled: CompiledExpression, mark: str,
                  oversample: int = OVERSAMPLE) -> int:
    """Samples y = f(x) densely along x and marks the nearest cell of each sample."""
    n = grid.width * oversample
    step = view.x_span / n
    xs = view.xmin + np.arange(n) * step
    ys = compiled.evaluate_array(x=xs, y=np.zeros_like(xs))

    ok = np.isfinite(ys)
    skipped = n - int(np.count_nonzero(ok))
    if skipped:
        logger.debug("%r: %d of %d samples undefined", compiled.raw_text, skipped, n)

    cols = view.col_at_x(xs[ok])
    rows = view.row_at_y(ys[ok])
    return grid.put_many(rows, cols, mark)


def plot_implicit(grid: Grid, view: Viewport, compiled: CompiledExpression, mark: str) -> int:
    """Scans every cell and marks it where |F(x, y)| < eps."""
    eps = implicit_epsilon(view)
    rows, cols = np.indices((grid.height, grid.width))
    xs = view.x_at_col(cols.astype(float))
    ys = view.y_at_row(rows.astype(float))

    residual = compiled.evaluate_array(x=xs, y=ys)
    # NaN compares False, so undefined cells drop out here
    hit = np.abs(residual) < eps
    return grid.put_many(rows[hit], cols[hit], mark)


def plot_expression(grid: Grid, view: Viewport, compiled: CompiledExpression, mark: str) -> int:
    unbound = compiled.free_variables - PLOT_VARIABLES
    if unbound:
        logger.warning("%r uses unbound variable(s) %s; nothing will be plotted",
                       compiled.raw_text, ", ".join(sorted(unbound)))
    if compiled.uses_dependent_variable:
        written = plot_implicit(grid, view, compiled, mark)
    else:
        written = plot_explicit(grid, view, compiled, mark)
    logger.debug("%s %r plotted %d samples with %r", compiled.kind, compiled.raw_text, written, mark)
    return written
