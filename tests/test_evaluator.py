import math

import numpy as np

from asciigrapher.config import PlotConfig
from asciigrapher.evaluator import (
    Annotation,
    EvaluationRequest,
    build_requests,
    format_bindings,
    format_number,
    run_evaluations,
)


def test_requests_align_by_index():
    cfg = PlotConfig(expressions=["x"], evals=["x^2", "x+y"], eval_x=[1.0, 2.0], eval_y=[5.0, 6.0],
                     marks=[True, False], labels=["A"])
    reqs = build_requests(cfg)
    assert reqs[0] == EvaluationRequest("x^2", x=1.0, y=5.0, mark=True, label="A")
    assert reqs[1] == EvaluationRequest("x+y", x=2.0, y=6.0, mark=False, label=None)


def test_missing_entries_are_unbound():
    cfg = PlotConfig(expressions=["x"], evals=["x", "x", "x"], eval_x=[1.0, 2.0], labels=["a", "b"])
    reqs = build_requests(cfg)
    assert reqs[2].x is None
    assert reqs[2].label is None
    assert reqs[2].bindings() == {}
    assert not reqs[2].mark


def test_single_flag_binds_only_the_first_request(default_view, default_grid, capsys):
    cfg = PlotConfig(expressions=["x"], evals=["x^2", "2*3"], eval_x=[3.0], marks=[True, True], labels=["A"])
    reqs = build_requests(cfg)
    assert reqs[1] == EvaluationRequest("2*3", mark=True)

    notes = run_evaluations(default_grid, default_view, reqs, "@")
    out = capsys.readouterr().out
    assert "Eval 2: 2*3 with {} = 6" in out
    # (3, 9) is above ymax and the second request has no point to mark
    assert notes == []
    assert not (default_grid.cells == "@").any()


def test_format_helpers():
    assert format_number(9.0) == "9"
    assert format_number(-0.5) == "-0.5"
    assert format_number(math.inf) == "inf"
    assert format_number(1e-10) == "1e-10"
    assert format_number(2.0000000001) == "2.0000000001"
    assert format_bindings({"x": 3.0, "t": 0.25}) == '{"x":3,"t":0.25}'


def test_eval_outside_viewport_prints_but_does_not_mark(default_view, default_grid, capsys):
    reqs = [EvaluationRequest("x^2", x=3.0, mark=True)]
    notes = run_evaluations(default_grid, default_view, reqs, "@")

    out = capsys.readouterr().out
    assert 'Eval 1: x^2 with {"x":3} = 9' in out
    assert notes == []
    assert "@" not in set(default_grid.cells.ravel())


def test_eval_inside_viewport_marks_implied_y(default_view, default_grid, capsys):
    reqs = [EvaluationRequest("x^2", x=2.0, mark=True)]
    notes = run_evaluations(default_grid, default_view, reqs, "@")

    assert notes == [Annotation("@", "(2.00, 4.00)")]
    assert default_grid[default_view.row_at_y(4), default_view.col_at_x(2)] == "@"
    assert str(notes[0]) == "@ (2.00, 4.00)"


def test_bound_y_is_used_for_the_mark(default_view, default_grid, capsys):
    reqs = [EvaluationRequest("x+y", x=1.0, y=2.0, mark=True, label="P")]
    notes = run_evaluations(default_grid, default_view, reqs, "@")

    assert "= 3" in capsys.readouterr().out
    assert notes == [Annotation("@", "P")]
    assert default_grid[default_view.row_at_y(2), default_view.col_at_x(1)] == "@"


def test_unmarked_request_leaves_grid_alone(default_view, default_grid, capsys):
    run_evaluations(default_grid, default_view, [EvaluationRequest("x^2", x=2.0)], "@")
    assert np.all(default_grid.cells == " ")


def test_failures_are_isolated(default_view, default_grid, capsys):
    reqs = [
        EvaluationRequest("x +", x=2.0),
        EvaluationRequest("t*2", x=2.0),
        EvaluationRequest("x^3", x=2.0),
    ]
    run_evaluations(default_grid, default_view, reqs, "@")

    captured = capsys.readouterr()
    assert "Evaluation failed for x +" in captured.err
    assert "Evaluation failed for t*2" in captured.err
    assert "Eval 3: x^3" in captured.out
    assert captured.out.strip().endswith("= 8")


def test_parametric_request_has_no_point_to_mark(default_view, default_grid, capsys):
    notes = run_evaluations(default_grid, default_view, [EvaluationRequest("t^2", t=2.0, mark=True)], "@")
    assert "= 4" in capsys.readouterr().out
    assert notes == []
