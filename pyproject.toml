[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "muxer"
version = "0.1.0"
description = "Music library tools: song, album, artist and genre entities, a genre catalog and an SQLite store of album similarity data."
requires-python = ">=3.10"
dependencies = []
keywords = ["music", "genres", "similarity", "albums", "tags", "sqlite"]
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
    "Topic :: Multimedia :: Sound/Audio",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["muxer"]

[tool.pytest.ini_options]
addopts = "-ra"
