[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rfalm"
version = "0.1.0"
description = "Robotic factory assembly line manager: robots, tasks, a task queue with undo, and production summaries"
requires-python = ">=3.10"
dependencies = []
keywords = ["factory", "robots", "assembly line", "task queue", "production"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Manufacturing",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
rfalm = "rfalm.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["rfalm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
