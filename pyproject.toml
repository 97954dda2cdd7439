[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "actorhost"
version = "1.0.0"
description = "Host-side runtime for virtual actors: registration, method dispatch, reminders, timers and transactional actor state."
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["actors", "virtual actors", "distributed", "state management", "reminders", "timers"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["actorhost"]

[tool.hatch.build.targets.sdist]
include = ["actorhost", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
