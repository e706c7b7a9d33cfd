import numpy as np
import pytest

from bubbleengine.camera import Camera
from bubbleengine.frustum import AABB, Frustum, bounding_box, frustum_planes


def _translation(x, y, z):
    m = np.identity(4)
    m[:3, 3] = [x, y, z]
    return m


def test_new_box_is_empty():
    box = AABB()
    assert box.is_empty()
    assert box.min is None and box.max is None


def test_extend_tracks_min_and_max():
    box = AABB()
    box.extend((1.0, -2.0, 3.0))
    box.extend((-1.0, 4.0, 0.0))
    assert not box.is_empty()
    assert np.array_equal(box.min, [-1.0, -2.0, 0.0])
    assert np.array_equal(box.max, [1.0, 4.0, 3.0])


def test_corners_constructor_requires_both():
    with pytest.raises(ValueError):
        AABB((0.0, 0.0, 0.0), None)


def test_extend_rejects_wrong_length():
    with pytest.raises(ValueError):
        AABB().extend((1.0, 2.0))


def test_bounding_box_matches_extend():
    points = [(0.0, 1.0, 2.0), (3.0, -1.0, 5.0), (-2.0, 0.5, 1.0)]
    box = bounding_box(points)
    assert box == AABB((-2.0, -1.0, 1.0), (3.0, 1.0, 5.0))
    assert bounding_box([]).is_empty()


def test_transform_translation_shifts_box():
    box = AABB((0.0, 0.0, 0.0), (1.0, 2.0, 3.0))
    moved = box.transform(_translation(10.0, -5.0, 2.0))
    assert np.allclose(moved.min, box.min + [10.0, -5.0, 2.0])
    assert np.allclose(moved.max, box.max + [10.0, -5.0, 2.0])


def test_transform_rotation_encloses_rotated_corners():
    box = AABB((0.0, 0.0, 0.0), (1.0, 2.0, 3.0))
    rotate_z = np.array([
        [0.0, -1.0, 0.0, 0.0],
        [1.0, 0.0, 0.0, 0.0],
        [0.0, 0.0, 1.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])
    turned = box.transform(rotate_z)
    assert np.allclose(turned.min, [-2.0, 0.0, 0.0])
    assert np.allclose(turned.max, [0.0, 1.0, 3.0])


def test_transform_of_empty_is_empty():
    assert AABB().transform(_translation(1.0, 2.0, 3.0)).is_empty()


def test_planes_of_identity_are_unit_normals():
    planes = frustum_planes(np.identity(4))
    assert planes.shape == (5, 4)
    assert np.allclose(np.linalg.norm(planes[:, :3], axis=1), 1.0)


def test_planes_reject_degenerate_and_misshaped_matrices():
    with pytest.raises(ValueError):
        frustum_planes(np.zeros((4, 4)))
    with pytest.raises(ValueError):
        frustum_planes(np.identity(3))


@pytest.mark.parametrize(
    "low,high,inside",
    [
        ((-0.5, -0.5, -0.5), (0.5, 0.5, 0.5), True),
        ((5.0, -0.5, 0.2), (6.0, 0.5, 0.5), False),
        ((-0.5, 5.0, 0.2), (0.5, 6.0, 0.5), False),
        ((-0.5, -6.0, 0.2), (0.5, -5.0, 0.5), False),
        ((-0.5, -0.5, -0.5), (0.5, 0.5, -0.1), False),
        ((-0.5, -0.5, 5.0), (0.5, 0.5, 6.0), False),
        ((-6.0, -0.5, 0.2), (-5.0, 0.5, 0.5), True),
    ],
)
def test_identity_frustum_culling(low, high, inside):
    assert Frustum(np.identity(4)).contains(AABB(low, high)) is inside


def test_perspective_frustum_culls_behind_and_beyond():
    cam = Camera()
    frustum = Frustum(cam.projection_matrix(800, 600) @ cam.look_at_matrix())
    assert frustum.contains(AABB((-1.0, -1.0, -11.0), (1.0, 1.0, -9.0)))
    assert not frustum.contains(AABB((-1.0, -1.0, 9.0), (1.0, 1.0, 11.0)))
    assert not frustum.contains(AABB((-1.0, -1.0, -8001.0), (1.0, 1.0, -7999.0)))


def test_box_straddling_a_plane_is_kept():
    frustum = Frustum(np.identity(4))
    assert frustum.contains(AABB((0.5, -0.5, 0.2), (3.0, 0.5, 0.5)))


def test_contains_rejects_empty_box():
    with pytest.raises(ValueError):
        Frustum(np.identity(4)).contains(AABB())