[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gwexchanger"
version = "0.1.0"
description = "Currency exchange-rate service backed by SQLite, with YAML configuration and structured logging"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
    "termcolor",
]
keywords = ["currency", "exchange", "rates", "sqlite", "service"]
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
    "Topic :: Office/Business :: Financial",
    "Topic :: Database",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["gwexchanger"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
