"""Scene components and their conversion to and from JSON-ready data."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

import numpy as np

from .light import Light, LightType, Vec3


def _vec3(value: Sequence[float]) -> Vec3:
    items = tuple(float(x) for x in value)
    if len(items) != 3:
        raise ValueError(f"expected 3 components, got {len(items)}")
    return items  # type: ignore[return-value]


def _vec3_to_json(value: Sequence[float]) -> List[float]:
    return [float(x) for x in value]


def _vec3_from_json(data: Sequence[Any]) -> Vec3:
    return (float(data[0]), float(data[1]), float(data[2]))


@dataclass
class ModelRegistry:
    """Loaded models by path; ``loader`` loads a model not yet known."""

    models: Dict[str, Any] = field(default_factory=dict)
    loader: Optional[Callable[[str], Any]] = None

    def path_of(self, model: Any) -> str:
        """The path the given model object was loaded from."""
        for path, loaded in self.models.items():
            if loaded is model:
                return path
        raise KeyError("model was not loaded through this registry")

    def load(self, path: str) -> Any:
        """The model at ``path``, loading and caching it on first use."""
        if path not in self.models:
            if self.loader is None:
                raise KeyError(f"no model loaded from {path!r}")
            self.models[path] = self.loader(path)
        return self.models[path]


@dataclass
class TagComponent:
    """A display name."""

    tag: str = ""

    def serialize(self, models: ModelRegistry) -> Dict[str, Any]:
        return {"Tag": self.tag}

    @staticmethod
    def deserialize(data: Dict[str, Any], models: ModelRegistry) -> "TagComponent":
        return TagComponent(str(data["Tag"]))


@dataclass
class PositionComponent:
    position: Vec3 = (0.0, 0.0, 0.0)

    def __post_init__(self) -> None:
        self.position = _vec3(self.position)

    def serialize(self, models: ModelRegistry) -> Dict[str, Any]:
        return {"Position": _vec3_to_json(self.position)}

    @staticmethod
    def deserialize(data: Dict[str, Any], models: ModelRegistry) -> "PositionComponent":
        return PositionComponent(_vec3_from_json(data["Position"]))


@dataclass
class RotationComponent:
    rotation: Vec3 = (0.0, 0.0, 0.0)

    def __post_init__(self) -> None:
        self.rotation = _vec3(self.rotation)

    def serialize(self, models: ModelRegistry) -> Dict[str, Any]:
        return {"Rotation": _vec3_to_json(self.rotation)}

    @staticmethod
    def deserialize(data: Dict[str, Any], models: ModelRegistry) -> "RotationComponent":
        return RotationComponent(_vec3_from_json(data["Rotation"]))


@dataclass
class ScaleComponent:
    scale: Vec3 = (1.0, 1.0, 1.0)

    def __post_init__(self) -> None:
        self.scale = _vec3(self.scale)

    def serialize(self, models: ModelRegistry) -> Dict[str, Any]:
        return {"Scale": _vec3_to_json(self.scale)}

    @staticmethod
    def deserialize(data: Dict[str, Any], models: ModelRegistry) -> "ScaleComponent":
        return ScaleComponent(_vec3_from_json(data["Scale"]))


class TransformComponent:
    """A 4x4 model matrix indexed ``m[row][col]``; saved as 16 floats column by column."""

    def __init__(self, matrix: Optional[Any] = None) -> None:
        array = np.identity(4) if matrix is None else np.array(matrix, dtype=float)
        if array.shape != (4, 4):
            raise ValueError(f"expected a 4x4 matrix, got shape {array.shape}")
        self.matrix = array

    def __array__(self, dtype: Any = None) -> np.ndarray:
        return self.matrix if dtype is None else self.matrix.astype(dtype)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransformComponent):
            return NotImplemented
        return bool(np.array_equal(self.matrix, other.matrix))

    def __repr__(self) -> str:
        return f"TransformComponent({self.matrix.tolist()})"

    def serialize(self, models: ModelRegistry) -> Dict[str, Any]:
        return {"Transform": [float(x) for x in self.matrix.flatten(order="F")]}

    @staticmethod
    def deserialize(data: Dict[str, Any], models: ModelRegistry) -> "TransformComponent":
        values = np.array(data["Transform"], dtype=float)
        if values.shape != (16,):
            raise ValueError(f"a transform needs 16 values, got shape {values.shape}")
        return TransformComponent(values.reshape((4, 4), order="F"))


class LightComponent(Light):
    """A light attached to an entity."""

    def serialize(self, models: ModelRegistry) -> Dict[str, Any]:
        return {
            "Light": {
                "Type": int(self.light_type),
                "Brightness": self.brightness,
                "Distance": self.distance,
                "Constant": self.constant,
                "Linear": self.linear,
                "Quadratic": self.quadratic,
                "CutOff": self.cutoff,
                "OuterCutOff": self.outer_cutoff,
                "Position": _vec3_to_json(self.position),
                "Color": _vec3_to_json(self.color),
                "Direction": _vec3_to_json(self.direction),
            }
        }

    @staticmethod
    def deserialize(data: Dict[str, Any], models: ModelRegistry) -> "LightComponent":
        light = data["Light"]
        return LightComponent(
            light_type=LightType(light["Type"]),
            brightness=float(light["Brightness"]),
            distance=float(light["Distance"]),
            constant=float(light["Constant"]),
            linear=float(light["Linear"]),
            quadratic=float(light["Quadratic"]),
            cutoff=float(light["CutOff"]),
            outer_cutoff=float(light["OuterCutOff"]),
            position=_vec3_from_json(light["Position"]),
            direction=_vec3_from_json(light["Direction"]),
            color=_vec3_from_json(light["Color"]),
        )


@dataclass
class ModelComponent:
    """A shared reference to a loaded model; saved as the model's path."""

    model: Any = None

    def serialize(self, models: ModelRegistry) -> Dict[str, Any]:
        return {"Model": models.path_of(self.model)}

    @staticmethod
    def deserialize(data: Dict[str, Any], models: ModelRegistry) -> "ModelComponent":
        return ModelComponent(models.load(data["Model"]))


SERIALIZABLE_COMPONENTS = (
    TagComponent,
    PositionComponent,
    RotationComponent,
    ScaleComponent,
    TransformComponent,
    LightComponent,
    ModelComponent,
)