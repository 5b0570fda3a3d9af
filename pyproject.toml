[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pggen"
version = "0.1.0"
description = "Runtime helpers for PostgreSQL data access clients: field sets, not-found errors, INSERT/UPDATE statement builders, client wrappers and generator option parsing."
requires-python = ">=3.10"
dependencies = []
keywords = ["postgres", "postgresql", "sql", "database", "field-set", "statement-builder"]
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
    "Topic :: Database",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pggen"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
