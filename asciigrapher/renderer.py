from typing import List, Sequence, Tuple

from colorama import Style

from .evaluator import Annotation
from .expression import CompiledExpression
from .grid import AXIS_GLYPHS, Grid
from .raster import PALETTE, color_for, marker_for
from .viewport import Viewport

RESET = Style.RESET_ALL


def _paint(glyph: str, color: str, use_color: bool) -> str:
    return f"{color}{glyph}{RESET}" if use_color else glyph


def render_grid(grid: Grid, chars: str, use_color: bool = True) -> List[str]:
    lines = []
    for row in grid.cells:
        line = []
        for ch in row:
            if ch in AXIS_GLYPHS or ch not in chars:
                line.append(str(ch))
            else:
                # Color follows the glyph's slot in the marker set
                line.append(_paint(ch, PALETTE[chars.index(ch) % len(PALETTE)], use_color))
        lines.append("".join(line))
    return lines


def render_legend(plotted: Sequence[Tuple[int, CompiledExpression]], chars: str,
                  use_color: bool = True) -> List[str]:
    lines = ["Legend:"]
    for index, compiled in plotted:
        glyph = _paint(marker_for(index, chars), color_for(index), use_color)
        lines.append(f"{glyph}: {compiled.raw_text}")
    return lines


def render_annotations(annotations: Sequence[Annotation]) -> List[str]:
    if not annotations:
        return []
    return ["Annotations:"] + [f" {a}" for a in annotations]


def render_summary(view: Viewport) -> str:
    return (f"x:[{view.xmin:.2f}, {view.xmax:.2f}] y:[{view.ymin:.2f}, {view.ymax:.2f}] "
            f"size:{view.width}x{view.height}")


def render_document(grid: Grid, view: Viewport, plotted: Sequence[Tuple[int, CompiledExpression]],
                    annotations: Sequence[Annotation], chars: str, use_color: bool = True) -> str:
    lines = render_grid(grid, chars, use_color)
    lines += [""] + render_legend(plotted, chars, use_color)
    notes = render_annotations(annotations)
    if notes:
        lines += [""] + notes
    lines += ["", render_summary(view)]
    return "\n".join(lines)
