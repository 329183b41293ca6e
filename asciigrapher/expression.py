import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Optional, Tuple

import numpy as np
import sympy as sp
from sympy.parsing.sympy_parser import (
    parse_expr,
    standard_transformations,
    implicit_multiplication_application,
    convert_xor
)

from .errors import EvaluationError, ParseError

logger = logging.getLogger(__name__)

DEPENDENT_VARIABLE = "y"

TRANSFORMATIONS = (standard_transformations +
                   (implicit_multiplication_application, convert_xor))

# Names the parser would otherwise treat as free symbols
CONSTANTS = {"e": sp.E, "pi": sp.pi}

_Y_PREFIX = re.compile(r'^y=', re.IGNORECASE)


@dataclass(frozen=True)
class Evaluation:
    """Result-or-failure of one evaluation. Never raised, always returned."""
    value: Optional[float] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.value is not None

    @property
    def finite(self) -> bool:
        return self.ok and math.isfinite(self.value)

    @classmethod
    def failure(cls, exc: Exception) -> "Evaluation":
        return cls(value=None, error=str(exc) or type(exc).__name__)


def clean_expression(text: str) -> str:
    """Drops all whitespace, then a leading 'y=' (any case)."""
    cleaned = re.sub(r'\s+', '', text)
    return _Y_PREFIX.sub('', cleaned, count=1)


@dataclass(frozen=True)
class CompiledExpression:
    raw_text: str
    cleaned_text: str
    expr: sp.Expr
    free_variables: FrozenSet[str]
    _args: Tuple[str, ...] = field(repr=False, compare=False)
    _func: Callable[..., Any] = field(repr=False, compare=False)

    @property
    def uses_dependent_variable(self) -> bool:
        return DEPENDENT_VARIABLE in self.free_variables

    @property
    def kind(self) -> str:
        return "implicit" if self.uses_dependent_variable else "explicit"

    def _missing(self, bindings: Dict[str, Any]):
        return sorted(name for name in self._args if bindings.get(name) is None)

    def evaluate(self, bindings: Dict[str, Optional[float]]) -> Evaluation:
        missing = self._missing(bindings)
        if missing:
            return Evaluation.failure(EvaluationError(f"Undefined symbol(s): {', '.join(missing)}"))
        try:
            with np.errstate(all="ignore"):
                raw = self._func(*(bindings[name] for name in self._args))
            value = complex(raw)
        except (ArithmeticError, ValueError, TypeError, NameError) as e:
            return Evaluation.failure(e)
        if value.imag != 0:
            return Evaluation.failure(EvaluationError(f"Result is not real: {value}"))
        return Evaluation(value=float(value.real))

    def evaluate_array(self, **arrays: np.ndarray) -> np.ndarray:
        """Vectorized evaluation. Failed or non-finite samples come back as NaN."""
        shape = np.broadcast(*arrays.values()).shape if arrays else ()
        nan = np.full(shape, np.nan)
        if self._missing(arrays):
            return nan
        try:
            with np.errstate(all="ignore"):
                raw = self._func(*(arrays[name] for name in self._args))
                out = np.broadcast_to(np.asarray(raw), shape)
                if np.iscomplexobj(out):
                    out = np.where(out.imag == 0, out.real, np.nan)
                out = np.asarray(out, dtype=float)
        except (ArithmeticError, ValueError, TypeError, NameError) as e:
            # e.g. math-module functions such as gamma reject arrays
            logger.debug("vectorized evaluation of %r failed (%s), evaluating per sample", self.raw_text, e)
            return self._evaluate_each(arrays, shape)
        return np.where(np.isfinite(out), out, np.nan)

    def _evaluate_each(self, arrays: Dict[str, np.ndarray], shape: Tuple[int, ...]) -> np.ndarray:
        columns = {name: np.broadcast_to(np.asarray(arrays[name], dtype=float), shape) for name in self._args}
        out = np.full(shape, np.nan)
        for idx in np.ndindex(*shape):
            result = self.evaluate({name: float(col[idx]) for name, col in columns.items()})
            if result.finite:
                out[idx] = result.value
        return out


def _parse(cleaned: str) -> Any:
    # An equation "lhs=rhs" is plotted as the residual lhs - rhs
    if cleaned.count("=") == 1:
        lhs_str, rhs_str = cleaned.split("=")
        lhs = parse_expr(lhs_str, local_dict=dict(CONSTANTS), transformations=TRANSFORMATIONS)
        rhs = parse_expr(rhs_str, local_dict=dict(CONSTANTS), transformations=TRANSFORMATIONS)
        return lhs - rhs
    return parse_expr(cleaned, local_dict=dict(CONSTANTS), transformations=TRANSFORMATIONS)


def compile_expression(text: str) -> CompiledExpression:
    """Parses text into a CompiledExpression. Raises ParseError on bad input."""
    cleaned = clean_expression(text)
    if not cleaned:
        raise ParseError(text, "empty expression")
    try:
        expr = _parse(cleaned)
    except Exception as e:
        raise ParseError(text, str(e) or type(e).__name__) from e
    if not isinstance(expr, sp.Expr):
        raise ParseError(text, f"not a numeric expression ({type(expr).__name__})")

    symbols = sorted(expr.free_symbols, key=lambda s: s.name)
    args = tuple(s.name for s in symbols)
    func = sp.lambdify(symbols, expr, modules=["numpy", "math"])

    compiled = CompiledExpression(
        raw_text=text,
        cleaned_text=cleaned,
        expr=expr,
        free_variables=frozenset(args),
        _args=args,
        _func=func,
    )
    logger.debug("compiled %r -> %s (%s, vars=%s)", text, expr, compiled.kind, sorted(args))
    return compiled
