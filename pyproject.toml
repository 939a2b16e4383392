[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "isolated"
version = "1.0.0"
description = "Simulation systems for an underground survival world: heat transfer, human physiology and procedural geology."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "simulation",
    "thermal",
    "physiology",
    "procedural-generation",
    "perlin-noise",
    "geology",
    "hydrology",
]
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
    "Topic :: Games/Entertainment :: Simulation",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["isolated"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
