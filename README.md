# bubbleengine

The engine-side core of a small 3D renderer, written in plain Python and numpy.
It holds the data and the math that a renderer works from: cameras, lights,
bounding boxes, std140 uniform layouts, an entity-component scene, and the
JSON form of scenes and background settings.

## Modules

- `bubbleengine.strutil`: string and path helpers. `replace_all`,
  `normalize_path` (backslashes to forward slashes), `right_part_last_of`,
  `mid_part_last_of` and `create_rel_path`.
- `bubbleengine.tree`: `Node`, which holds `data` and ordered `children`, and
  `Tree`, which has one `root`. `Node.append` wraps plain values in a new node.
- `bubbleengine.layout`: `GLSLDataType`, `glsl_type_size`, `BufferElement` and
  `BufferLayout`. The layout works out each element's offset and the stride.
  The stride is zero when the first element's `count` is above one, which
  means the attributes are stored in blocks.
- `bubbleengine.uniform_buffer`: `std140_size`, `std140_alignment` and a
  `UniformBuffer` that holds its contents in host memory and lays them out by
  std140 rules. Indexing a buffer gives a `UniformArrayElement`, whose fields
  are written by name with `set_int`, `set_float`, `set_float2`, `set_float3`,
  `set_float4` and `set_mat4`. `UniformBuffer.data` returns the bytes.
- `bubbleengine.camera`: the classes `Camera`, `FreeCamera`,
  `ThirdPersonCamera` and `TargetCamera`, the `CameraMovement` enum and
  `skybox_view_matrix`.
  - Matrices are 4x4 numpy arrays indexed `m[row][col]`.
  - Angles are in radians.
  - Time steps are in seconds.
- `bubbleengine.frustum`: `AABB` (with `extend`, `transform` and `is_empty`),
  `bounding_box`, `frustum_planes` and `Frustum`.
  - `Frustum.contains` returns False only when a box lies wholly outside one
    of the planes.
  - The planes are right, top, bottom, near and far. There is no left plane.
- `bubbleengine.light`: the `LightType` enum, `attenuation_constants` and
  `Light`.
  - `Light` has the factories `create_dir_light`, `create_point_light` and
    `create_spot_light`.
  - `Light.update` recomputes the derived attenuation, cutoff and brightness
    values.
  - `Light.to_std140` packs the light as one std140 struct.
- `bubbleengine.scene`: an entity-component `Registry`, with `Scene` and
  `Entity` on top of it.
  - Entities are integer identifiers.
  - Each entity has at most one component of each type.
  - `Scene.create_entity` tags a new entity with its name, or with
    `Entity <id>` when no name is given.
- `bubbleengine.components`: `TagComponent`, `PositionComponent`,
  `RotationComponent`, `ScaleComponent`, `TransformComponent`,
  `LightComponent` and `ModelComponent`.
  - Each component has `serialize` and `deserialize`.
  - Models are saved by their path through a `ModelRegistry`.
- `bubbleengine.texture`: the `PixelFormat` enum, `Texture2DSpecification`
  (with `set_channels` and `channel_count`) and `texture_size`.
- `bubbleengine.scene_state`: the `BackgroundType` enum and
  `RendererSceneState`.
  - `effective_background` falls back to `COLOR` when the chosen skybox or
    skysphere resources are missing.
- `bubbleengine.serialization`: `scene_to_json`, `scene_from_json`,
  `scene_state_to_json` and `scene_state_from_json`. They convert to and from
  plain dicts and lists that the `json` module can write.

## Install

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

```python
import json

from bubbleengine.scene import Scene
from bubbleengine.components import ModelRegistry, PositionComponent
from bubbleengine.serialization import scene_from_json, scene_to_json

scene = Scene()
player = scene.create_entity("Player")
player.emplace(PositionComponent((0.0, 1.0, 0.0)))

text = json.dumps(scene_to_json(scene, ModelRegistry()))
restored = scene_from_json(json.loads(text), Scene(), ModelRegistry())
```

```python
from bubbleengine.camera import CameraMovement, FreeCamera
from bubbleengine.frustum import AABB, Frustum

camera = FreeCamera()
camera.process_movement(CameraMovement.FORWARD, 0.016)
camera.update(0.016)

view = camera.look_at_matrix()
projection = camera.projection_matrix(1280, 720)
frustum = Frustum(projection @ view)
visible = frustum.contains(AABB((-1.0, -1.0, -10.0), (1.0, 1.0, -8.0)))
```

## What it does not do

- It draws nothing and needs no graphics context. There are no GPU buffers,
  shaders or textures, only their layouts and descriptions.
- It loads no files. Models, skyboxes and skysphere textures are loaded by
  callables you supply: `ModelRegistry.loader`, and the `load_skybox` and
  `load_skysphere` arguments of `scene_state_from_json`.
- It writes no files. Serialization produces and reads dicts; writing them to
  a project file is up to you.
- It has no command-line program.