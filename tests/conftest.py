import pytest

from asciigrapher.config import PlotConfig
from asciigrapher.grid import Grid
from asciigrapher.viewport import Viewport


def make_view(**overrides) -> Viewport:
    cfg = PlotConfig(expressions=["x"], **overrides)
    return Viewport.from_config(cfg)


@pytest.fixture
def default_view() -> Viewport:
    return make_view()


@pytest.fixture
def default_grid(default_view) -> Grid:
    return Grid(default_view.width, default_view.height)
