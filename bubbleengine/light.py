"""Light sources and their packing into std140 uniform data."""

from __future__ import annotations

import enum
import math
import struct
from dataclasses import dataclass
from typing import Sequence, Tuple

Vec3 = Tuple[float, float, float]

# Linear and quadratic attenuation terms for ranges of 7, 13, 20, 32, 50, 65,
# 100, 160, 200, 325, 600 and 3250 metres.
ATTENUATION_LOOKUP: Tuple[Tuple[float, float], ...] = (
    (0.7, 1.8),
    (0.35, 0.44),
    (0.22, 0.20),
    (0.14, 0.07),
    (0.09, 0.032),
    (0.07, 0.017),
    (0.045, 0.0075),
    (0.027, 0.0028),
    (0.022, 0.0019),
    (0.014, 0.0007),
    (0.007, 0.0002),
    (0.0014, 0.000007),
)

_STD140_FORMAT = "<i19f"


class LightType(enum.IntEnum):
    """Kinds of light; the values are those stored in shaders and saved files."""

    DIR_LIGHT = 0
    POINT_LIGHT = 1
    SPOT_LIGHT = 2


def _as_vec3(value: Sequence[float]) -> Vec3:
    items = tuple(float(x) for x in value)
    if len(items) != 3:
        raise ValueError(f"expected 3 components, got {len(items)}")
    return items  # type: ignore[return-value]


def _normalize(value: Sequence[float]) -> Vec3:
    x, y, z = _as_vec3(value)
    length = math.sqrt(x * x + y * y + z * z)
    if length == 0.0:
        raise ValueError("cannot normalize a zero-length direction")
    return (x / length, y / length, z / length)


def attenuation_constants(distance: float) -> Tuple[float, float]:
    """Linear and quadratic attenuation for a distance from 0 (7 m) to 1 (3250 m).

    Values between table entries are interpolated linearly; distances past
    the end of the table use its last entry.
    """
    if distance < 0:
        raise ValueError(f"distance must not be negative, got {distance}")
    index = distance * 11.0
    high = index - math.floor(index)
    low = 1.0 - high
    position = int(index)
    last = len(ATTENUATION_LOOKUP) - 1
    first = ATTENUATION_LOOKUP[min(position, last)]
    second = ATTENUATION_LOOKUP[min(position + 1, last)]
    return (
        first[0] * low + second[0] * high,
        first[1] * low + second[1] * high,
    )


@dataclass
class Light:
    """A directional, point or spot light.

    ``cutoff`` and ``outer_cutoff`` are angles in degrees; ``distance`` runs from
    0 to 1. ``effective_brightness``, ``cos_cutoff`` and ``cos_outer_cutoff`` are
    derived by :meth:`update` and are what shaders receive.
    """

    light_type: LightType = LightType.DIR_LIGHT
    color: Vec3 = (1.0, 1.0, 1.0)
    direction: Vec3 = (0.0, 0.0, 0.0)
    position: Vec3 = (0.0, 0.0, 0.0)
    constant: float = 1.0
    linear: float = 0.0
    quadratic: float = 0.0
    cutoff: float = 0.0
    outer_cutoff: float = 0.0
    distance: float = 0.0
    brightness: float = 1.0
    effective_brightness: float = 1.0
    cos_cutoff: float = 0.0
    cos_outer_cutoff: float = 0.0

    def __post_init__(self) -> None:
        self.light_type = LightType(self.light_type)
        self.color = _as_vec3(self.color)
        self.direction = _as_vec3(self.direction)
        self.position = _as_vec3(self.position)

    def set_distance(self, distance: float) -> None:
        """Set the distance and the attenuation terms that go with it."""
        self.linear, self.quadratic = attenuation_constants(distance)
        self.distance = distance

    def update(self) -> None:
        """Recompute attenuation, cutoff cosines and compensated brightness."""
        self.linear, self.quadratic = attenuation_constants(self.distance)
        self.cos_cutoff = math.cos(math.radians(self.cutoff))
        self.cos_outer_cutoff = math.cos(math.radians(self.outer_cutoff))
        if self.light_type in (LightType.POINT_LIGHT, LightType.SPOT_LIGHT):
            self.effective_brightness = self.brightness * (7.0 - self.distance * 5.0)
        else:
            self.effective_brightness = self.brightness

    def to_std140(self) -> bytes:
        """The light as one std140 struct, as the lights uniform buffer holds it."""
        return struct.pack(
            _STD140_FORMAT,
            int(self.light_type),
            self.effective_brightness,
            self.constant,
            self.linear,
            self.quadratic,
            self.cos_cutoff,
            self.cos_outer_cutoff,
            0.0,
            *self.color,
            0.0,
            *self.direction,
            0.0,
            *self.position,
            0.0,
        )

    @staticmethod
    def create_dir_light(
        direction: Sequence[float] = (-1.0, -1.0, -1.0),
        color: Sequence[float] = (1.0, 1.0, 1.0),
    ) -> "Light":
        """A directional light shining along ``direction``."""
        return Light(
            light_type=LightType.DIR_LIGHT,
            direction=_normalize(direction),
            color=_as_vec3(color),
        )

    @staticmethod
    def create_point_light(
        position: Sequence[float] = (0.0, 0.0, 0.0),
        distance: float = 0.5,
        color: Sequence[float] = (1.0, 1.0, 1.0),
    ) -> "Light":
        """A point light at ``position`` reaching ``distance`` (0 to 1)."""
        light = Light(
            light_type=LightType.POINT_LIGHT,
            position=_as_vec3(position),
            distance=distance,
            color=_as_vec3(color),
        )
        light.update()
        return light

    @staticmethod
    def create_spot_light(
        position: Sequence[float] = (0.0, 0.0, 0.0),
        direction: Sequence[float] = (1.0, 0.0, 0.0),
        distance: float = 0.5,
        cutoff: float = 12.5,
        outer_cutoff: float = 17.5,
        color: Sequence[float] = (1.0, 1.0, 1.0),
    ) -> "Light":
        """A spot light; the cutoff angles are in degrees."""
        light = Light(
            light_type=LightType.SPOT_LIGHT,
            position=_as_vec3(position),
            direction=_normalize(direction),
            distance=distance,
            cutoff=cutoff,
            outer_cutoff=outer_cutoff,
            color=_as_vec3(color),
        )
        light.update()
        return light