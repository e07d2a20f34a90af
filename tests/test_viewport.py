import numpy as np
import pytest

from juliaset import build, plane_grid, plane_param


def test_default_window_widens_y_range():
    viewport = build(800, 600)
    assert viewport.x_range == 4.0
    assert viewport.y_range == pytest.approx(3.0)
    assert viewport.x_start == -2.0
    assert viewport.y_start == pytest.approx(1.5)
    assert viewport.x_inc == pytest.approx(4.0 / 800)
    assert viewport.y_inc == pytest.approx(3.0 / 600)


@pytest.mark.parametrize("width,height", [(800, 300), (1000, 400), (2001, 1000)])
def test_wide_window_changes_only_x_range(width, height):
    viewport = build(width, height)
    assert viewport.y_range == 2.0
    assert viewport.x_range == pytest.approx(2.0 * width / height)


@pytest.mark.parametrize("width,height", [(800, 600), (300, 300), (1999, 1000)])
def test_narrow_window_changes_only_y_range(width, height):
    viewport = build(width, height)
    assert viewport.x_range == 4.0
    assert viewport.y_range == pytest.approx(4.0 * height / width)


def test_aspect_ratio_matches_pixels():
    for width, height in [(800, 600), (640, 200), (123, 457)]:
        viewport = build(width, height)
        assert viewport.x_range / viewport.y_range == pytest.approx(width / height)


def test_rejects_non_positive_dimensions():
    with pytest.raises(ValueError):
        build(0, 600)
    with pytest.raises(ValueError):
        build(800, -1)


def test_pixel_to_plane_corners():
    viewport = build(800, 600)
    assert viewport.pixel_to_plane(0, 0) == (viewport.x_start, viewport.y_start)

    zx, zy = viewport.pixel_to_plane(799, 599)
    right = viewport.x_start + viewport.x_range
    bottom = viewport.y_start - viewport.y_range
    assert abs(zx - right) <= viewport.x_inc + 1e-12
    assert abs(zy - bottom) <= viewport.y_inc + 1e-12
    assert zx < right
    assert zy > bottom


def test_plane_grid_matches_scalar_mapping():
    viewport = build(40, 30)
    X, Y = plane_grid(viewport)
    assert X.shape == (30, 40)
    assert Y.shape == (30, 40)
    for py, px in [(0, 0), (29, 39), (7, 13), (15, 20)]:
        assert (X[py, px], Y[py, px]) == viewport.pixel_to_plane(px, py)


def test_plane_param_inside_window_uses_viewport():
    viewport = build(800, 600)
    assert plane_param(viewport, (400, 300)) == viewport.pixel_to_plane(400, 300)
    assert plane_param(viewport, (400, 300)) == pytest.approx((0.0, 0.0))


def test_plane_param_clamps_by_default():
    viewport = build(800, 600)
    assert plane_param(viewport, (-50, -20)) == viewport.pixel_to_plane(0, 0)
    assert plane_param(viewport, (900, 700)) == viewport.pixel_to_plane(800, 600)
    assert plane_param(viewport, (900, 700)) == pytest.approx((
        viewport.x_start + viewport.x_range,
        viewport.y_start - viewport.y_range,
    ))


def test_plane_param_leaves_last_pixel_column_alone():
    viewport = build(800, 600)
    assert plane_param(viewport, (799.5, 0)) == viewport.pixel_to_plane(799.5, 0)
    assert plane_param(viewport, (0, 599.5)) == viewport.pixel_to_plane(0, 599.5)
    assert plane_param(viewport, (800, 600)) == viewport.pixel_to_plane(800, 600)


def test_plane_param_can_extrapolate():
    viewport = build(800, 600)
    re, im = plane_param(viewport, (-200, 900), clamp=False)
    assert re < viewport.x_start
    assert im < viewport.y_start - viewport.y_range
    assert np.isclose(re, viewport.x_start - 200 * viewport.x_inc)
