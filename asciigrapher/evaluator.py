import json
import logging
import math
import sys
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, TypeVar

from .config import PlotConfig
from .errors import ParseError
from .expression import compile_expression
from .grid import Grid
from .viewport import Viewport

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class EvaluationRequest:
    expr_text: str
    x: Optional[float] = None
    y: Optional[float] = None
    t: Optional[float] = None
    mark: bool = False
    label: Optional[str] = None

    def bindings(self) -> Dict[str, float]:
        """Only the variables that were actually given."""
        scope = {"x": self.x, "y": self.y, "t": self.t}
        return {k: v for k, v in scope.items() if v is not None}


@dataclass(frozen=True)
class Annotation:
    marker_char: str
    label_text: str

    def __str__(self) -> str:
        return f"{self.marker_char} {self.label_text}"


def _pick(values: Sequence[T], index: int) -> Optional[T]:
    return values[index] if index < len(values) else None


def build_requests(config: PlotConfig) -> List[EvaluationRequest]:
    requests = []
    for i, expr_text in enumerate(config.evals):
        requests.append(EvaluationRequest(
            expr_text=expr_text,
            x=_pick(config.eval_x, i),
            y=_pick(config.eval_y, i),
            t=_pick(config.eval_t, i),
            mark=bool(_pick(config.marks, i)),
            label=_pick(config.labels, i),
        ))
    return requests


def format_number(val: float) -> str:
    if not math.isfinite(val):
        return str(val)
    if float(val).is_integer() and abs(val) < 1e15:
        return f"{int(val)}"
    return repr(val)


def format_bindings(bindings: Dict[str, float]) -> str:
    shown = {k: int(v) if float(v).is_integer() else v for k, v in bindings.items()}
    return json.dumps(shown, separators=(",", ":"))


def format_point(x: float, y: float) -> str:
    return f"({x:.2f}, {y:.2f})"


def run_evaluations(grid: Grid, view: Viewport, requests: Sequence[EvaluationRequest],
                    mark_char: str) -> List[Annotation]:
    """
    Evaluates each request independently. Failures are reported on stderr and do
    not stop the remaining requests. Returns the annotations for marked points.
    """
    annotations: List[Annotation] = []

    for i, req in enumerate(requests, start=1):
        scope = req.bindings()
        try:
            compiled = compile_expression(req.expr_text)
        except ParseError as e:
            print(f"Evaluation failed for {req.expr_text}: {e.message}", file=sys.stderr)
            continue

        result = compiled.evaluate(scope)
        if not result.ok:
            print(f"Evaluation failed for {req.expr_text}: {result.error}", file=sys.stderr)
            continue

        print(f"Eval {i}: {req.expr_text} with {format_bindings(scope)} = {format_number(result.value)}")

        # With only x given, the result is the point's y
        px, py = req.x, req.y
        if req.x is not None and req.y is None and req.t is None:
            py = result.value

        if not req.mark:
            continue
        if px is None or py is None:
            logger.debug("eval %d: no plottable point for mark", i)
            continue

        cell = view.cell_at(px, py)
        if cell is None:
            logger.debug("eval %d: point (%g, %g) outside the viewport, not marked", i, px, py)
            continue
        grid.put(*cell, mark_char)

        annotations.append(Annotation(mark_char, req.label or format_point(px, py)))

    return annotations
