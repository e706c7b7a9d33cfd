"""Cameras, lights, bounding boxes, std140 uniform layouts, an entity-component scene and its JSON form for a small 3D renderer."""

__version__ = "0.1.0"

__all__ = [
    "strutil",
    "tree",
    "layout",
    "uniform_buffer",
    "camera",
    "frustum",
    "light",
    "scene",
    "components",
    "texture",
    "scene_state",
    "serialization",
]