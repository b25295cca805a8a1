[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rigid2d"
version = "0.1.0"
description = "Two-dimensional rigid body simulation with collisions, connections and a software rasterizer"
requires-python = ">=3.10"
dependencies = []
keywords = ["physics", "rigid body", "simulation", "collision", "rasterizer", "2d"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rigid2d"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
