[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "artycomp"
version = "0.1.0"
description = "Artillery fire-direction computer: simulated firing solutions and an interactive store of gun types, guns and targets"
requires-python = ">=3.10"
dependencies = []
keywords = ["artillery", "ballistics", "fire-direction", "simulation", "grid", "mils"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
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
test = ["pytest"]

[project.scripts]
artycomp = "artycomp.pages:main"
artycomp-ballistics = "artycomp.ballistics:main"

[tool.hatch.build.targets.wheel]
packages = ["artycomp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
