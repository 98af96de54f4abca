[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "coloringsolver"
version = "0.1.0"
description = "Heuristic solvers for the graph coloring problem: greedy orderings, DSATUR and row-weighting local search."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "graph coloring",
    "vertex coloring",
    "combinatorial optimization",
    "heuristics",
    "local search",
    "dsatur",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
coloringsolver = "coloringsolver.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["coloringsolver"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
