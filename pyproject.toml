[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "platformer2d"
version = "0.1.0"
description = "A small 2D side-scrolling platformer with sprite-sheet animation, AABB collision and gamepad support"
requires-python = ">=3.10"
keywords = ["game", "platformer", "2d", "pygame", "sprite", "animation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
platformer2d = "platformer2d.game:main"

[tool.hatch.build.targets.wheel]
packages = ["platformer2d"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
