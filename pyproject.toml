[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "softrender"
version = "0.1.0"
description = "Small CPU renderers: a shaded triangle rasterizer with an OBJ loader, ray-tracing scene primitives and Bezier curve drawing."
requires-python = ">=3.10"
keywords = [
    "rasterizer",
    "ray tracing",
    "phong",
    "obj",
    "wavefront",
    "bezier",
    "software rendering",
    "computer graphics",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Education",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
softrender-raster = "softrender.raster_cli:main"
softrender-bezier = "softrender.bezier:main"

[tool.hatch.build.targets.wheel]
packages = ["softrender"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
