import math

import numpy as np
import pytest

from gui.projection import ProjectionMatrix, build_projection, logical_size

VIEWPORT = ((0, 800), (0, 600))


def test_matrix_primitives():
    p = np.array([[1.0, 0.0, 0.0]])
    assert np.allclose(ProjectionMatrix.shift(1, 2, 3).transform(p), [[2, 2, 3]])
    assert np.allclose(ProjectionMatrix.scale(2).transform(p), [[2, 0, 0]])
    assert np.allclose(ProjectionMatrix.rotate(0, 0, math.pi / 2).transform(p), [[0, 1, 0]])
    assert np.allclose(ProjectionMatrix.rotate(math.pi / 2, 0, 0).transform([[0, 1, 0]]), [[0, 0, 1]])
    assert ProjectionMatrix.identity() == ProjectionMatrix()


def test_then_applies_left_operand_first():
    p = [[1.0, 0.0, 0.0]]
    shift_then_scale = ProjectionMatrix.shift(1, 0, 0).then(ProjectionMatrix.scale(2))
    scale_then_shift = ProjectionMatrix.scale(2).then(ProjectionMatrix.shift(1, 0, 0))
    assert np.allclose(shift_then_scale.project(p), [[4, 0]])
    assert np.allclose(scale_then_shift.project(p), [[3, 0]])


def test_matrix_is_immutable():
    m = ProjectionMatrix.scale(2)
    with pytest.raises(ValueError):
        m.m[0, 0] = 5.0
    with pytest.raises(ValueError):
        ProjectionMatrix(np.eye(3))


def test_logical_size_is_eighty_percent_of_short_edge():
    assert logical_size(VIEWPORT) == 480
    assert logical_size(((0, 0), (0, 0))) == 0


def test_no_rotation_steps_when_camera_is_level():
    view = build_projection(VIEWPORT, 0.0, 0.0)
    assert view.steps == ("recenter", "scale", "reposition")
    expected = (ProjectionMatrix.shift(-240, -240, -240)
                .then(ProjectionMatrix.scale(0.7))
                .then(ProjectionMatrix.shift(400, 300, 0)))
    assert view.matrix == expected


def test_yaw_is_composed_before_pitch():
    pitch, yaw = 0.4, 1.2
    view = build_projection(VIEWPORT, pitch, yaw)
    assert view.steps == ("recenter", "rotate-yaw", "rotate-pitch", "scale", "reposition")
    expected = (ProjectionMatrix.shift(-240, -240, -240)
                .then(ProjectionMatrix.rotate(0, 0, yaw))
                .then(ProjectionMatrix.rotate(pitch, 0, 0))
                .then(ProjectionMatrix.scale(0.7))
                .then(ProjectionMatrix.shift(400, 300, 0)))
    assert view.matrix == expected

    swapped = (ProjectionMatrix.shift(-240, -240, -240)
               .then(ProjectionMatrix.rotate(pitch, 0, 0))
               .then(ProjectionMatrix.rotate(0, 0, yaw))
               .then(ProjectionMatrix.scale(0.7))
               .then(ProjectionMatrix.shift(400, 300, 0)))
    assert not view.matrix == swapped


def test_single_rotations():
    assert build_projection(VIEWPORT, 0.3, 0.0).steps == ("recenter", "rotate-pitch", "scale", "reposition")
    assert build_projection(VIEWPORT, 0.0, -0.3).steps == ("recenter", "rotate-yaw", "scale", "reposition")


def test_tiny_rotation_is_skipped_without_visible_change():
    skipped = build_projection(VIEWPORT, 1e-30, -1e-30)
    assert "rotate-yaw" not in skipped.steps
    assert "rotate-pitch" not in skipped.steps
    applied = (ProjectionMatrix.shift(-240, -240, -240)
               .then(ProjectionMatrix.rotate(0, 0, 1e-30))
               .then(ProjectionMatrix.rotate(1e-30, 0, 0))
               .then(ProjectionMatrix.scale(0.7))
               .then(ProjectionMatrix.shift(400, 300, 0)))
    assert skipped.matrix == applied


def test_degenerate_viewport_skips_recenter_but_keeps_scale_and_rotations():
    view = build_projection(((0, 0), (0, 0)), 0.5, 0.25)
    assert view.steps == ("rotate-yaw", "rotate-pitch", "scale")
    assert view.size == 0
    expected = (ProjectionMatrix.rotate(0, 0, 0.25)
                .then(ProjectionMatrix.rotate(0.5, 0, 0))
                .then(ProjectionMatrix.scale(0.7)))
    assert view.matrix == expected


def test_small_viewport_still_recentres_when_size_positive():
    view = build_projection(((0, 3), (0, 3)), 0.0, 0.0)
    assert view.size == 2
    assert view.steps[0] == "recenter"


@pytest.mark.parametrize("pitch,yaw", [(0.0, 0.0), (0.7, 0.0), (1.1, 0.6), (-0.9, 2.5)])
def test_scene_centre_lands_on_viewport_centre(pitch, yaw):
    view = build_projection(VIEWPORT, pitch, yaw)
    v = view.size // 2
    assert np.allclose(view.matrix.project([[v, v, v]]), [[400, 300]])


def test_scale_shrinks_extent():
    view = build_projection(VIEWPORT, 0.0, 0.0)
    corners = view.matrix.project([[0, 0, 0], [480, 480, 0]])
    width = corners[1, 0] - corners[0, 0]
    assert width == pytest.approx(480 * 0.7)
