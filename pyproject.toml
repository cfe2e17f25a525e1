[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hammerclock"
version = "0.1"
description = "Terminal-based chess clock and phase tracker for tabletop games"
requires-python = ">=3.10"
dependencies = [
    "urwid",
]
keywords = ["chess clock", "tabletop", "wargaming", "timer", "terminal", "tui"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console :: Curses",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
hammerclock = "hammerclock.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["hammerclock"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
