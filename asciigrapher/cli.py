"""
ASCII Graph CLI - plot expressions in the terminal.

Usage:
    ascii-graph -e "sin(x)" -e "x^2 + y^2 - 9"
    ascii-graph -e "x^2" --eval "x^2" --x 3 --mark --zoom 2
"""

import argparse
import logging
import sys
from typing import List, Optional

import colorama

from .config import DEFAULT_CHARS, PlotConfig
from .errors import ConfigError
from .pipeline import build_plot

logger = logging.getLogger(__name__)

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _bool_arg(value: str) -> bool:
    v = value.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise argparse.ArgumentTypeError(f"expected a boolean, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    d = PlotConfig()
    parser = argparse.ArgumentParser(
        prog="ascii-graph",
        usage='%(prog)s -e "<expr>" [-e "<expr2>"] [options]',
        description="ASCII graphing with colors, zoom, pan, evaluation, and annotations.",
    )
    parser.add_argument("-e", "--expr", action="append", required=True, metavar="EXPR",
                        help="Expression(s) to plot (explicit y=f(x) or implicit F(x,y)=0)")

    grid = parser.add_argument_group("canvas")
    grid.add_argument("--width", type=float, default=d.width, help="Canvas width (chars)")
    grid.add_argument("--height", type=float, default=d.height, help="Canvas height (rows)")
    grid.add_argument("--xmin", type=float, default=d.xmin, help="Min x")
    grid.add_argument("--xmax", type=float, default=d.xmax, help="Max x")
    grid.add_argument("--ymin", type=float, default=d.ymin, help="Min y")
    grid.add_argument("--ymax", type=float, default=d.ymax, help="Max y")
    grid.add_argument("--zoom", type=float, default=d.zoom, help="Zoom factor (>1 zooms in)")
    grid.add_argument("--panx", type=float, default=d.panx, help="Pan x direction")
    grid.add_argument("--pany", type=float, default=d.pany, help="Pan y direction")
    grid.add_argument("--ticks", action=argparse.BooleanOptionalAction, default=d.show_ticks,
                      help="Show axis ticks")
    grid.add_argument("--chars", default=DEFAULT_CHARS, help="Marker chars used per expression")
    grid.add_argument("--color", action=argparse.BooleanOptionalAction, default=d.use_color,
                      help="Emit ANSI colors")

    ev = parser.add_argument_group("evaluation")
    ev.add_argument("--eval", action="append", default=[], metavar="EXPR",
                    help="Expression(s) to evaluate at point(s)")
    ev.add_argument("--x", action="append", type=float, default=[], help="x value(s) for evaluation")
    ev.add_argument("--y", action="append", type=float, default=[],
                    help="y value(s) for evaluation (optional)")
    ev.add_argument("--t", action="append", type=float, default=[],
                    help="t value(s) for parametric evaluation")
    ev.add_argument("--mark", action="append", type=_bool_arg, nargs="?", const=True, default=[],
                    metavar="BOOL", help="Mark evaluated point(s) on graph")
    ev.add_argument("--markchar", default=d.mark_char, help="Character for marked point")
    ev.add_argument("--label", action="append", default=[], help="Label for evaluated point(s)")
    ev.add_argument("--labeloffset", type=float, default=d.label_offset,
                    help="Horizontal offset for label (accepted, currently unused)")

    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    return parser


def config_from_args(args: argparse.Namespace) -> PlotConfig:
    return PlotConfig(
        expressions=list(args.expr),
        width=args.width,
        height=args.height,
        xmin=args.xmin,
        xmax=args.xmax,
        ymin=args.ymin,
        ymax=args.ymax,
        zoom=args.zoom,
        panx=args.panx,
        pany=args.pany,
        show_ticks=args.ticks,
        chars=args.chars,
        use_color=args.color,
        evals=list(args.eval),
        eval_x=list(args.x),
        eval_y=list(args.y),
        eval_t=list(args.t),
        marks=list(args.mark),
        labels=list(args.label),
        mark_char=args.markchar,
        label_offset=args.labeloffset,
        verbose=args.verbose,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = config_from_args(args)

    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    colorama.just_fix_windows_console()

    try:
        result = build_plot(config)
    except ConfigError as e:
        print(e, file=sys.stderr)
        return 1

    print(result.render(config.chars, use_color=config.use_color))
    return 0


if __name__ == "__main__":
    sys.exit(main())
