import pytest

from scales import (
    BandScale,
    LinearScale,
    ThresholdScale,
    heat_palette,
    interior_breakpoints,
    threshold_breakpoints,
)


def test_band_scale_collapses_repeated_years():
    scale = BandScale([1950, 1950, 1951, 1951, 1952], (0, 300))
    assert scale.domain == [1950, 1951, 1952]
    assert scale.bandwidth == 100
    assert scale(1950) == 0
    assert scale(1952) == 200
    assert scale.center(1951) == 150
    assert scale(1999) is None


def test_band_scale_month_rows():
    scale = BandScale(range(12), (0, 410))
    assert scale(0) == 0
    assert scale(11) == pytest.approx(410 - 410 / 12)
    assert scale.bandwidth == pytest.approx(410 / 12)


def test_threshold_scale_is_a_right_bisect_step_function():
    scale = ThresholdScale([0, 10], ["a", "b", "c"])
    assert scale(-1) == "a"
    assert scale(0) == "b"
    assert scale(9.99) == "b"
    assert scale(10) == "c"
    assert scale.bucket(100) == 2


def test_threshold_scale_requires_enough_colours():
    with pytest.raises(ValueError):
        ThresholdScale([0, 1, 2], ["a", "b"])


def test_linear_scale_and_degenerate_domain():
    assert LinearScale((-5, 5), (0, 300))(0) == 150
    assert LinearScale((2, 2), (0, 300))(2) == 150


def test_threshold_breakpoints_have_nine_interior_points():
    points = threshold_breakpoints(-5.0, 5.0, 10)
    assert points == [-5.0, -4.0, -3.0, -2.0, -1.0, 0.0, 1.0, 2.0, 3.0, 4.0]
    inner = interior_breakpoints(-5.0, 5.0, 10)
    assert len(inner) == 9
    assert all(-5.0 < p < 5.0 for p in inner)


def test_threshold_breakpoints_never_drift_past_count():
    # accumulating 0.1 ten times overshoots; index arithmetic must not
    assert len(threshold_breakpoints(1.68, 13.888, 10)) == 10
    assert len(threshold_breakpoints(0.0, 1.0, 10)) == 10


def test_heat_palette_runs_cold_to_hot():
    palette = heat_palette(10)
    assert len(palette) == 11
    assert palette[0] == "rgb(49,54,149)"
    assert palette[-1] == "rgb(165,0,38)"


def test_heat_palette_size_must_match_ramp():
    with pytest.raises(ValueError):
        heat_palette(5)
