from pathlib import Path

import numpy as np
import pytest

from swcoupling.profiles import (
    make_series_constant,
    make_series_from_table,
    make_series_linear,
    make_series_step,
)


def test_simple_series():
    assert make_series_constant(0.3)(100.0) == 0.3
    lin = make_series_linear(1.0, -0.1)
    assert lin(5.0) == pytest.approx(0.5)
    assert lin(50.0) == 0.0
    assert lin.events[0][0] == pytest.approx(10.0)
    step = make_series_step(0.0, 0.4, 2.0)
    assert step(1.9) == 0.0 and step(2.0) == 0.4
    np.testing.assert_allclose(step.array(np.array([0.0, 3.0])), [0.0, 0.4])


def test_table_interpolates_and_holds_ends(tmp_path: Path):
    p = tmp_path / "depth.csv"
    p.write_text("0,0.0\n10,1.0\n20,0.5\n", encoding="utf-8")
    s = make_series_from_table("tab", p)
    assert s(-5.0) == 0.0
    assert s(5.0) == pytest.approx(0.5)
    assert s(15.0) == pytest.approx(0.75)
    assert s(99.0) == pytest.approx(0.5)


def test_table_rejects_unsorted_time(tmp_path: Path):
    p = tmp_path / "depth.csv"
    p.write_text("0,0.0\n10,1.0\n5,0.5\n", encoding="utf-8")
    with pytest.raises(ValueError, match="strictly increasing"):
        make_series_from_table("tab", p)


def test_table_clips_negative_depths(tmp_path: Path):
    p = tmp_path / "depth.csv"
    p.write_text("0,-0.2\n10,1.0\n", encoding="utf-8")
    with pytest.warns(UserWarning, match="negative"):
        s = make_series_from_table("tab", p)
    assert s(0.0) == 0.0
