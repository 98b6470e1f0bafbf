[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ferrite"
version = "0.1.0"
description = "Voxel engine core: chunk coordinates, Morton codes, fly camera, terrain generation and frame planning for a ray-marched renderer"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["voxel", "rendering", "ray marching", "taa", "morton", "chunk", "swapchain"]
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
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ferrite"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
