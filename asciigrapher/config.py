import math
from dataclasses import dataclass, field
from typing import List

from .errors import ConfigError

# --- Defaults ---
MIN_WIDTH = 10
MIN_HEIGHT = 5
DEFAULT_CHARS = "*+ox#%@"


def _whole(size: float) -> int:
    # nan and inf count as 0, so the minimum size applies
    return int(size) if math.isfinite(size) else 0


@dataclass
class PlotConfig:
    expressions: List[str] = field(default_factory=list)

    # Grid size (characters)
    width: int = 90
    height: int = 30

    # Base viewport
    xmin: float = -10.0
    xmax: float = 10.0
    ymin: float = -5.0
    ymax: float = 5.0

    # Viewport transforms
    zoom: float = 1.0
    panx: float = 0.0
    pany: float = 0.0

    # Axes & markers
    show_ticks: bool = True
    chars: str = DEFAULT_CHARS
    use_color: bool = True

    # Point evaluation (parallel lists, aligned by index)
    evals: List[str] = field(default_factory=list)
    eval_x: List[float] = field(default_factory=list)
    eval_y: List[float] = field(default_factory=list)
    eval_t: List[float] = field(default_factory=list)
    marks: List[bool] = field(default_factory=list)
    labels: List[str] = field(default_factory=list)
    mark_char: str = "@"

    # Accepted for compatibility, not used by the renderer yet
    label_offset: float = 2.0

    verbose: bool = False

    @property
    def grid_width(self) -> int:
        return max(MIN_WIDTH, _whole(self.width))

    @property
    def grid_height(self) -> int:
        return max(MIN_HEIGHT, _whole(self.height))

    @property
    def effective_zoom(self) -> float:
        # zoom <= 0 is a no-op, not an error
        if self.zoom > 0 and self.zoom != float("inf"):
            return float(self.zoom)
        return 1.0

    def validate(self) -> None:
        if not self.expressions:
            raise ConfigError("At least one expression (-e/--expr) is required.")
        if not self.chars:
            raise ConfigError("Marker character set (--chars) must not be empty.")
        if len(self.mark_char) != 1:
            raise ConfigError("Mark character (--markchar) must be exactly one character.")
