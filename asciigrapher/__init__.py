from .config import PlotConfig
from .errors import ConfigError, EvaluationError, GrapherError, ParseError
from .expression import CompiledExpression, Evaluation, compile_expression
from .grid import Grid
from .pipeline import PlotResult, build_plot
from .viewport import Viewport, nice_tick

__all__ = [
    "CompiledExpression",
    "ConfigError",
    "Evaluation",
    "EvaluationError",
    "GrapherError",
    "Grid",
    "ParseError",
    "PlotConfig",
    "PlotResult",
    "Viewport",
    "build_plot",
    "compile_expression",
    "nice_tick",
]

__version__ = "0.1.0"
