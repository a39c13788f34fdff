[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cubgame"
version = "0.1.0"
description = "A small raycasting maze explorer that loads .cub scene files, with sliding doors and a minimap"
requires-python = ">=3.10"
keywords = ["raycasting", "game", "maze", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Intended Audience :: End Users/Desktop",
    "Topic :: Games/Entertainment :: First Person Shooters",
]
dependencies = [
    "pillow",
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cubgame = "cubgame.game:main"

[tool.hatch.build.targets.wheel]
packages = ["cubgame"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
