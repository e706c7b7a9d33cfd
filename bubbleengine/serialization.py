"""Saving scenes and renderer background settings as JSON-ready data."""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional

from .components import SERIALIZABLE_COMPONENTS, ModelRegistry
from .scene import Scene
from .scene_state import BackgroundType, RendererSceneState


def scene_to_json(scene: Scene, models: ModelRegistry) -> Dict[str, Any]:
    """Snapshot a scene's entities and components.

    ``"Size"`` holds the number of entities followed by the number of
    components of each type, ``"Entities"`` the entity identifiers and
    ``"Components"`` one ``{"Entity", "Component"}`` record per component.
    Empty lists are left out.
    """
    registry = scene.registry
    entities = registry.entities()
    sizes: List[int] = [len(entities)]
    components: List[Dict[str, Any]] = []
    for component_type in SERIALIZABLE_COMPONENTS:
        pairs = registry.components(component_type)
        sizes.append(len(pairs))
        components.extend(
            {"Entity": entity, "Component": component.serialize(models)}
            for entity, component in pairs
        )

    data: Dict[str, Any] = {}
    if entities:
        data["Entities"] = list(entities)
    data["Size"] = sizes
    if components:
        data["Components"] = components
    return data


def _next_record(records: Iterator[Dict[str, Any]]) -> Dict[str, Any]:
    try:
        return next(records)
    except StopIteration:
        raise ValueError("scene data holds fewer components than its sizes state") from None


def scene_from_json(data: Mapping[str, Any], scene: Scene, models: ModelRegistry) -> Scene:
    """Replace the scene's contents with a snapshot made by :func:`scene_to_json`.

    Entities keep their identifiers; entities left without any component
    are destroyed.
    """
    registry = scene.registry
    registry.clear()

    sizes = list(data.get("Size", []))
    entities = list(data.get("Entities", []))
    entity_count = int(sizes[0]) if sizes else 0
    if entity_count > len(entities):
        raise ValueError("scene data holds fewer entities than its size states")
    for entity in entities[:entity_count]:
        registry.create(int(entity))

    records = iter(data.get("Components", []))
    for position, component_type in enumerate(SERIALIZABLE_COMPONENTS, start=1):
        count = int(sizes[position]) if position < len(sizes) else 0
        for _ in range(count):
            record = _next_record(records)
            component = component_type.deserialize(record["Component"], models)
            registry.emplace(int(record["Entity"]), component)

    for entity in registry.entities():
        if not any(registry.has(entity, t) for t in SERIALIZABLE_COMPONENTS):
            registry.destroy(entity)
    return scene


def _path_of(resources: Mapping[str, Any], resource: Any) -> Optional[str]:
    if resource is None:
        return None
    return next((path for path, loaded in resources.items() if loaded is resource), None)


def scene_state_to_json(
    state: RendererSceneState,
    skyboxes: Mapping[str, Any],
    skyspheres: Mapping[str, Any],
) -> Dict[str, Any]:
    """Background settings, with skies named by the path they were loaded from.

    A sky that is not among the given loaded resources is left out.
    """
    data: Dict[str, Any] = {
        "BackgroundType": int(state.background_type),
        "ClearColor": [float(x) for x in state.clear_color],
        "SkyboxBlendFactor": state.skybox_blend_factor,
        "SkyboxBrightness": state.skybox_brightness,
        "SkyboxRotation": state.skybox_rotation,
        "SkyboxRotationSpeed": state.skybox_rotation_speed,
    }
    first = _path_of(skyboxes, state.skybox_first)
    if first is not None:
        data["SkyboxFirst"] = first
    second = _path_of(skyboxes, state.skybox_second)
    if second is not None:
        data["SkyboxSecond"] = second
    skysphere = _path_of(skyspheres, state.skysphere_texture)
    if skysphere is not None:
        data["Skysphere"] = skysphere
    return data


def scene_state_from_json(
    data: Mapping[str, Any],
    state: RendererSceneState,
    load_skybox: Callable[[str], Any],
    load_skysphere: Callable[[str], Any],
    base_path: str = "",
) -> RendererSceneState:
    """Apply saved background settings to ``state``.

    Skies are loaded through the given callables from ``base_path`` joined
    directly with the saved relative path.
    """
    state.background_type = BackgroundType(data["BackgroundType"])
    color = tuple(float(x) for x in data["ClearColor"])
    if len(color) != 4:
        raise ValueError(f"clear color needs 4 components, got {len(color)}")
    state.clear_color = color  # type: ignore[assignment]

    state.skybox_blend_factor = float(data["SkyboxBlendFactor"])
    state.skybox_brightness = float(data["SkyboxBrightness"])
    state.skybox_rotation = float(data["SkyboxRotation"])
    state.skybox_rotation_speed = float(data["SkyboxRotationSpeed"])

    if "SkyboxFirst" in data:
        state.skybox_first = load_skybox(base_path + str(data["SkyboxFirst"]))
    if "SkyboxSecond" in data:
        state.skybox_second = load_skybox(base_path + str(data["SkyboxSecond"]))
    if "Skysphere" in data:
        state.skysphere_texture = load_skysphere(base_path + str(data["Skysphere"]))
    return state