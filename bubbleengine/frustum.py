"""Axis-aligned bounding boxes and view-frustum culling."""

from __future__ import annotations

import itertools
from typing import Iterable, Optional, Sequence

import numpy as np


def _vec3(value: Sequence[float]) -> np.ndarray:
    array = np.array(value, dtype=float)
    if array.shape != (3,):
        raise ValueError(f"expected 3 components, got shape {array.shape}")
    return array


def _mat4(value: Sequence[Sequence[float]]) -> np.ndarray:
    array = np.asarray(value, dtype=float)
    if array.shape != (4, 4):
        raise ValueError(f"expected a 4x4 matrix, got shape {array.shape}")
    return array


class AABB:
    """An axis-aligned bounding box; it starts empty and grows to hold points."""

    def __init__(
        self,
        minimum: Optional[Sequence[float]] = None,
        maximum: Optional[Sequence[float]] = None,
    ) -> None:
        if (minimum is None) != (maximum is None):
            raise ValueError("give both corners or neither")
        self._min: Optional[np.ndarray] = None
        self._max: Optional[np.ndarray] = None
        if minimum is not None and maximum is not None:
            self.extend(minimum)
            self.extend(maximum)

    @property
    def min(self) -> Optional[np.ndarray]:
        """The lowest corner, or None for an empty box."""
        return None if self._min is None else self._min.copy()

    @property
    def max(self) -> Optional[np.ndarray]:
        """The highest corner, or None for an empty box."""
        return None if self._max is None else self._max.copy()

    def extend(self, point: Sequence[float]) -> None:
        """Grow the box to include ``point``."""
        p = _vec3(point)
        if self._min is None or self._max is None:
            self._min = p.copy()
            self._max = p.copy()
        else:
            self._min = np.minimum(self._min, p)
            self._max = np.maximum(self._max, p)

    def transform(self, matrix: Sequence[Sequence[float]]) -> "AABB":
        """Box around the eight corners mapped by the affine ``matrix``."""
        m = _mat4(matrix)
        if self._min is None or self._max is None:
            return AABB()
        result = AABB()
        for corner in itertools.product(*zip(self._min, self._max)):
            result.extend((m @ np.append(corner, 1.0))[:3])
        return result

    def is_empty(self) -> bool:
        return self._min is None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AABB):
            return NotImplemented
        if self.is_empty() or other.is_empty():
            return self.is_empty() and other.is_empty()
        return bool(np.array_equal(self._min, other._min) and np.array_equal(self._max, other._max))

    def __repr__(self) -> str:
        if self.is_empty():
            return "AABB()"
        return f"AABB({self._min.tolist()}, {self._max.tolist()})"


def bounding_box(points: Iterable[Sequence[float]]) -> AABB:
    """Smallest box holding every point, such as all vertex positions of a model."""
    box = AABB()
    for point in points:
        box.extend(point)
    return box


def frustum_planes(view_proj: Sequence[Sequence[float]]) -> np.ndarray:
    """Normalized culling planes ``(a, b, c, d)`` taken from a view-projection matrix.

    The rows are the right, top, bottom, near and far planes; a point lies on
    the inner side of a plane when ``a*x + b*y + c*z + d >= 0``. There is no
    left plane, and the near plane keeps points with non-negative clip ``z``.
    """
    m = _mat4(view_proj)
    planes = np.array([
        m[3] - m[0],
        m[3] - m[1],
        m[3] + m[1],
        m[2],
        m[3] - m[2],
    ])
    lengths = np.linalg.norm(planes[:, :3], axis=1)
    if np.any(lengths == 0.0):
        raise ValueError("view-projection matrix gives a degenerate frustum plane")
    return planes / lengths[:, None]


class Frustum:
    """The culling volume of a camera's view-projection matrix."""

    def __init__(self, view_proj: Sequence[Sequence[float]]) -> None:
        self.planes = frustum_planes(view_proj)

    def contains(self, box: AABB) -> bool:
        """False only when ``box`` lies wholly outside one of the planes."""
        low, high = box.min, box.max
        if low is None or high is None:
            raise ValueError("an empty box has no place in the frustum")
        for plane in self.planes:
            normal, constant = plane[:3], plane[3]
            furthest = np.where(normal < 0.0, low, high)
            if float(normal @ furthest) + constant < 0.0:
                return False
        return True