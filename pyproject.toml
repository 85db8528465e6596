[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ballz"
version = "0.1.0"
description = "A small top-down tile world game with procedural terrain, connected textures and binary save files"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["game", "tiles", "perlin", "procedural", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
ballz = "ballz.app:main"

[tool.hatch.build.targets.wheel]
packages = ["ballz"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
