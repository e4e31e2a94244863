[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flyearth"
version = "0.1.0"
description = "Globe camera, cubesphere mesh and city-spawning logic for a flight game set on Earth"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["game", "globe", "cubesphere", "camera", "simulation"]
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
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
flyearth = "flyearth.game:main"

[tool.hatch.build.targets.wheel]
packages = ["flyearth"]

[tool.pytest.ini_options]
addopts = "-ra"
