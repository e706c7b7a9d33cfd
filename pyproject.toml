[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bubbleengine"
version = "0.1.0"
description = "Scene, camera, lighting and serialization core of a small 3D rendering engine"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["3d", "rendering", "scene", "camera", "ecs", "std140", "frustum-culling"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["bubbleengine"]

[tool.pytest.ini_options]
addopts = "-ra"
