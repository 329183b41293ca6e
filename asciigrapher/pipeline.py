import logging
import sys
from dataclasses import dataclass, field
from typing import List, Tuple

from .axes import draw_axes
from .config import PlotConfig
from .errors import ParseError
from .evaluator import Annotation, build_requests, run_evaluations
from .expression import CompiledExpression, compile_expression
from .grid import Grid
from .raster import marker_for, plot_expression
from .renderer import render_document
from .viewport import Viewport

logger = logging.getLogger(__name__)


@dataclass
class PlotResult:
    view: Viewport
    grid: Grid
    plotted: List[Tuple[int, CompiledExpression]] = field(default_factory=list)
    annotations: List[Annotation] = field(default_factory=list)

    def render(self, chars: str, use_color: bool = True) -> str:
        return render_document(self.grid, self.view, self.plotted, self.annotations, chars, use_color)


def compile_plot_expressions(texts: List[str]) -> List[Tuple[int, CompiledExpression]]:
    """Compiles each -e expression; bad ones are reported and left out, keeping their index."""
    compiled = []
    for index, text in enumerate(texts):
        try:
            compiled.append((index, compile_expression(text)))
        except ParseError as e:
            print(f"Failed to parse expression '{text}': {e.message}", file=sys.stderr)
    return compiled


def build_plot(config: PlotConfig) -> PlotResult:
    """
    Runs every drawing phase in order: axes, curves, evaluation marks.
    Raises ConfigError before touching the grid if the configuration is unusable.
    """
    config.validate()
    view = Viewport.from_config(config)
    grid = Grid(view.width, view.height)

    draw_axes(grid, view, show_ticks=config.show_ticks)

    plotted = compile_plot_expressions(config.expressions)
    for index, compiled in plotted:
        plot_expression(grid, view, compiled, marker_for(index, config.chars))

    annotations = run_evaluations(grid, view, build_requests(config), config.mark_char)
    if config.label_offset != PlotConfig.label_offset:
        logger.debug("label offset %g accepted, labels are listed below the grid", config.label_offset)

    return PlotResult(view=view, grid=grid, plotted=plotted, annotations=annotations)
