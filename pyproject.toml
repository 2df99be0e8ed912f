[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ledgerapi"
version = "0.1.0"
description = "A small HTTP service for accounts and money transfers between them, backed by a SQL database."
requires-python = ">=3.10"
keywords = ["accounts", "transactions", "ledger", "transfers", "rest", "flask"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Office/Business :: Financial :: Accounting",
]
dependencies = [
    "flask>=2.2",
    "sqlalchemy>=2.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
ledgerapi = "ledgerapi.app:main"

[tool.hatch.build.targets.wheel]
packages = ["ledgerapi"]

[tool.hatch.build.targets.sdist]
include = ["ledgerapi", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
