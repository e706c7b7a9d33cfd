"""What the renderer draws behind and around a scene."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, List, Tuple


class BackgroundType(enum.IntEnum):
    """What fills the background; the values are those stored in saved files."""

    COLOR = 0
    SKYBOX = 1
    SKYSPHERE = 2


@dataclass
class RendererSceneState:
    """Background choice, sky resources and settings, and the active lights."""

    background_type: BackgroundType = BackgroundType.COLOR
    clear_color: Tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)
    skybox_first: Any = None
    skybox_second: Any = None
    skybox_blend_factor: float = 0.0
    skybox_brightness: float = 0.0
    skybox_rotation: float = 0.0
    skybox_rotation_speed: float = 0.0
    skysphere_texture: Any = None
    active_lights: List[Any] = field(default_factory=list)

    def effective_background(self) -> BackgroundType:
        """The background that can actually be drawn.

        A skybox needs both skyboxes and a skysphere needs its texture;
        otherwise the clear color is used.
        """
        if self.background_type is BackgroundType.SKYBOX and (
            self.skybox_first is None or self.skybox_second is None
        ):
            return BackgroundType.COLOR
        if (
            self.background_type is BackgroundType.SKYSPHERE
            and self.skysphere_texture is None
        ):
            return BackgroundType.COLOR
        return BackgroundType(self.background_type)