"""Perspective cameras: a free-flying camera, an orbiting one, and skybox views.

Matrices are 4x4 numpy arrays indexed ``m[row][col]`` and act on column vectors.
Time steps are given in seconds.
"""

from __future__ import annotations

import enum
import math
from typing import Sequence

import numpy as np

PI = 3.14159265359

YAW = -PI / 2
PITCH = 0.0
FOV = PI / 4
DELTA_FOV = 0.05

MAX_SPEED = 10.0
DELTA_SPEED = 5.0
SENSITIVITY = 4.25

_PITCH_LIMIT = PI / 2.0 - 0.1
_FOV_MIN = 0.1
_FOV_MAX = PI / 2.0
_REST_SPEED = 0.01


class CameraMovement(enum.Enum):
    """Directions a camera can be driven in."""

    FORWARD = enum.auto()
    BACKWARD = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    UP = enum.auto()
    DOWN = enum.auto()
    NO_DIRECTION = enum.auto()


def _vec3(value: Sequence[float]) -> np.ndarray:
    array = np.array(value, dtype=float)
    if array.shape != (3,):
        raise ValueError(f"expected 3 components, got shape {array.shape}")
    return array


def _normalize(vector: np.ndarray) -> np.ndarray:
    length = float(np.linalg.norm(vector))
    if length == 0.0:
        raise ValueError("cannot normalize a zero-length vector")
    return vector / length


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def _rotation(angle: float, axis: Sequence[float]) -> np.ndarray:
    """4x4 right-handed rotation by ``angle`` radians about ``axis``."""
    a = _normalize(np.asarray(axis, dtype=float))
    c, s = math.cos(angle), math.sin(angle)
    cross = np.array([
        [0.0, -a[2], a[1]],
        [a[2], 0.0, -a[0]],
        [-a[1], a[0], 0.0],
    ])
    matrix = np.identity(4)
    matrix[:3, :3] = c * np.identity(3) + (1.0 - c) * np.outer(a, a) + s * cross
    return matrix


def _accelerate(speed: float, positive: bool, delta: float, limit: float) -> float:
    """Speed after one push: reversing stops first, then grows up to the limit."""
    if positive:
        speed = max(speed, 0.0)
        return speed + delta if speed < limit else limit
    speed = min(speed, 0.0)
    return speed - delta if speed > -limit else -limit


def _clamp_speed(speed: float, limit: float) -> float:
    return _sign(speed) * limit if abs(speed) > limit else speed


def _decay(speed: float, delta: float) -> float:
    """Speed after one frame without input."""
    return 0.0 if abs(speed) < _REST_SPEED else speed - _sign(speed) * delta


def _clamp_pitch(pitch: float) -> float:
    return min(max(pitch, -_PITCH_LIMIT), _PITCH_LIMIT)


def _clamp_fov(fov: float) -> float:
    return min(max(fov, _FOV_MIN), _FOV_MAX)


class Camera:
    """A perspective camera described by position and Euler angles in radians."""

    def __init__(
        self,
        position: Sequence[float] = (0.0, 0.0, 0.0),
        yaw: float = YAW,
        pitch: float = PITCH,
        fov: float = FOV,
        up: Sequence[float] = (0.0, 1.0, 0.0),
    ) -> None:
        self.position = _vec3(position)
        self.front = np.array([0.0, 0.0, -1.0])
        self.up = np.zeros(3)
        self.right = np.zeros(3)
        self.world_up = _vec3(up)

        self.near = 0.1
        self.far = 5000.0

        self.mouse_sensitivity = SENSITIVITY

        self.yaw = float(yaw)
        self.pitch = float(pitch)

        self.fov = float(fov)
        self.delta_fov = DELTA_FOV

        self.max_speed = MAX_SPEED
        self.delta_speed = DELTA_SPEED
        self.speed_x = 0.0
        self.speed_y = 0.0

        self.update_vectors()

    def look_at_matrix(self) -> np.ndarray:
        """View matrix looking from the position along the front vector."""
        eye = self.position
        f = _normalize((eye + self.front) - eye)
        s = _normalize(np.cross(f, self.up))
        u = np.cross(s, f)
        matrix = np.identity(4)
        matrix[0, :3] = s
        matrix[1, :3] = u
        matrix[2, :3] = -f
        matrix[0, 3] = -float(s @ eye)
        matrix[1, 3] = -float(u @ eye)
        matrix[2, 3] = float(f @ eye)
        return matrix

    def projection_matrix(self, width: int, height: int) -> np.ndarray:
        """OpenGL perspective projection for a viewport of ``width`` x ``height``."""
        if width <= 0 or height <= 0:
            raise ValueError(f"viewport size must be positive, got {width}x{height}")
        aspect = width / height
        tan_half = math.tan(self.fov / 2.0)
        depth = self.far - self.near
        matrix = np.zeros((4, 4))
        matrix[0, 0] = 1.0 / (aspect * tan_half)
        matrix[1, 1] = 1.0 / tan_half
        matrix[2, 2] = -(self.far + self.near) / depth
        matrix[2, 3] = -(2.0 * self.far * self.near) / depth
        matrix[3, 2] = -1.0
        return matrix

    def update_vectors(self) -> None:
        """Recompute front, right and up from yaw and pitch."""
        front = np.array([
            math.cos(self.yaw) * math.cos(self.pitch),
            math.sin(self.pitch),
            math.sin(self.yaw) * math.cos(self.pitch),
        ])
        self.front = _normalize(front)
        self.right = _normalize(np.cross(self.front, self.world_up))
        self.up = _normalize(np.cross(self.right, self.front))


class FreeCamera(Camera):
    """A camera that flies with inertia and turns with the mouse."""

    def __init__(
        self,
        position: Sequence[float] = (0.0, 0.0, 0.0),
        yaw: float = YAW,
        pitch: float = PITCH,
        fov: float = FOV,
        up: Sequence[float] = (0.0, 1.0, 0.0),
    ) -> None:
        super().__init__(position, yaw, pitch, fov, up)
        self.last_mouse_x = 0.5
        self.last_mouse_y = 0.5
        self.is_moving_x = False
        self.is_moving_y = False

    def process_movement(self, direction: CameraMovement, dt: float) -> None:
        """Accelerate forward/backward or sideways in ``direction``."""
        limit = self.max_speed * self.delta_speed
        if direction in (CameraMovement.FORWARD, CameraMovement.BACKWARD):
            self.speed_x = _accelerate(
                self.speed_x, direction is CameraMovement.FORWARD, self.delta_speed, limit
            )
            self.is_moving_x = True
        if direction in (CameraMovement.RIGHT, CameraMovement.LEFT):
            self.speed_y = _accelerate(
                self.speed_y, direction is CameraMovement.RIGHT, self.delta_speed, limit
            )
            self.is_moving_y = True
        self.speed_x = _clamp_speed(self.speed_x, limit)
        self.speed_y = _clamp_speed(self.speed_y, limit)

    def process_mouse_movement(self, x: float, y: float) -> None:
        """Turn by the distance the mouse moved since the last call."""
        xoffset = (self.last_mouse_x - x) * self.mouse_sensitivity
        yoffset = (self.last_mouse_y - y) * self.mouse_sensitivity
        self.last_mouse_x = x
        self.last_mouse_y = y
        self.yaw -= xoffset
        self.pitch = _clamp_pitch(self.pitch - yoffset)

    def process_mouse_movement_shift(self, xoffset: float, yoffset: float) -> None:
        """Turn by a relative mouse offset."""
        self.yaw += xoffset * self.mouse_sensitivity
        self.pitch = _clamp_pitch(self.pitch + yoffset * self.mouse_sensitivity)

    def process_mouse_scroll(self, yoffset: float) -> None:
        """Widen the field of view when scrolling up, within its limits."""
        if _FOV_MIN <= self.fov <= _FOV_MAX:
            self.fov += yoffset * self.delta_fov
        self.fov = _clamp_fov(self.fov)

    def update(self, dt: float) -> None:
        """Apply inertia, move by the current speeds for ``dt`` seconds."""
        if not self.is_moving_x:
            self.speed_x = _decay(self.speed_x, self.delta_speed)
        if not self.is_moving_y:
            self.speed_y = _decay(self.speed_y, self.delta_speed)
        self.is_moving_x = False
        self.is_moving_y = False

        self.position = self.position + self.front * self.speed_x * dt
        self.position = self.position - self.right * self.speed_y * dt
        self.update_vectors()


class ThirdPersonCamera(Camera):
    """A camera orbiting a center point at a fixed radius."""

    def __init__(self, yaw: float = YAW, pitch: float = PITCH) -> None:
        super().__init__((0.0, 0.0, 0.0), yaw, pitch)
        self.center = np.zeros(3)
        self.radius = 20.0
        self.last_mouse_x = 0.5
        self.last_mouse_y = 0.5
        self.is_rotating_x = False
        self.is_rotating_y = False

    def process_rotation(self, direction: CameraMovement, dt: float) -> None:
        """Accelerate the orbit; directions are UP, DOWN, LEFT and RIGHT."""
        limit = self.max_speed * self.delta_speed
        if direction in (CameraMovement.LEFT, CameraMovement.RIGHT):
            self.speed_x = _accelerate(
                self.speed_x, direction is CameraMovement.LEFT, self.delta_speed, limit
            )
            self.is_rotating_x = True
        if direction in (CameraMovement.UP, CameraMovement.DOWN):
            self.speed_y = _accelerate(
                self.speed_y, direction is CameraMovement.UP, self.delta_speed, limit
            )
            self.is_rotating_y = True
        self.speed_x = _clamp_speed(self.speed_x, limit)
        self.speed_y = _clamp_speed(self.speed_y, limit)

    def process_mouse_movement(self, x: float, y: float) -> None:
        """Turn by the distance the mouse moved since the last call."""
        xoffset = (self.last_mouse_x - x) * self.mouse_sensitivity
        yoffset = (self.last_mouse_y - y) * self.mouse_sensitivity
        self.last_mouse_x = x
        self.last_mouse_y = y
        self.yaw -= xoffset
        self.pitch = _clamp_pitch(self.pitch - yoffset)

    def process_mouse_movement_shift(self, xoffset: float, yoffset: float) -> None:
        """Turn by a relative mouse offset."""
        self.yaw += xoffset * self.mouse_sensitivity
        self.pitch = _clamp_pitch(self.pitch + yoffset * self.mouse_sensitivity)

    def process_mouse_scroll(self, yoffset: float) -> None:
        """Narrow the field of view when scrolling up, within its limits."""
        if _FOV_MIN <= self.fov <= _FOV_MAX:
            self.fov -= yoffset * self.delta_fov
        self.fov = _clamp_fov(self.fov)

    def update(self, dt: float) -> None:
        """Apply inertia, advance the orbit and place the camera facing the center."""
        if not self.is_rotating_x:
            self.speed_x = _decay(self.speed_x, self.delta_speed)
        if not self.is_rotating_y:
            self.speed_y = _decay(self.speed_y, self.delta_speed)
        self.is_rotating_x = False
        self.is_rotating_y = False

        self.yaw += self.speed_x * dt
        self.pitch += self.speed_y * dt

        # The offset is a direction (w = 0), so the center's translation drops out.
        rotation = _rotation(self.yaw, (0.0, 1.0, 0.0)) @ _rotation(self.pitch, (1.0, 0.0, 0.0))
        self.position = rotation[:3, :3] @ np.array([0.0, 0.0, self.radius])

        self.front = _normalize(self.center - self.position)
        self.right = _normalize(np.cross(self.front, self.world_up))
        self.up = _normalize(np.cross(self.right, self.front))


class TargetCamera(Camera):
    """A camera aimed at a target; it adds nothing to the base camera yet."""


def skybox_view_matrix(view: Sequence[Sequence[float]], rotation: float = 0.0) -> np.ndarray:
    """View matrix for a skybox: rotate about Y and drop the translation."""
    matrix = np.asarray(view, dtype=float)
    if matrix.shape != (4, 4):
        raise ValueError(f"expected a 4x4 matrix, got shape {matrix.shape}")
    rotated = matrix @ _rotation(rotation, (0.0, 1.0, 0.0))
    result = np.identity(4)
    result[:3, :3] = rotated[:3, :3]
    return result