[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kongrun"
version = "0.1.0"
description = "A terminal barrel-dodging platform game with ladders, ghosts, a hammer and levels loaded from .screen files"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "terminal", "arcade", "platformer", "ascii"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
kongrun = "kongrun.game:main"

[tool.hatch.build.targets.wheel]
packages = ["kongrun"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
