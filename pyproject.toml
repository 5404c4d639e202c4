[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "taskledger"
version = "0.1.0"
description = "An operation-log task database with working sets, undo and compressed snapshots"
requires-python = ">=3.10"
dependencies = []
keywords = ["tasks", "todo", "task-database", "undo", "snapshot", "working-set"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
taskledger-msrv = "taskledger.msrv:main"

[tool.hatch.build.targets.wheel]
packages = ["taskledger"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
