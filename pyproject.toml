[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "emotionengine"
version = "0.1.0"
description = "Emotion simulation for game characters: tagged emotions, valence-arousal space, decay, combinations and spatial influence"
requires-python = ">=3.10"
dependencies = []
keywords = ["emotion", "simulation", "games", "plutchik", "valence-arousal", "npc"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["emotionengine"]

[tool.pytest.ini_options]
addopts = "-ra"
