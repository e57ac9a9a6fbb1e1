[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tradelab"
version = "0.1.0"
description = "Trading research toolkit: Kalman, ensemble and particle filters, stochastic models, timers and a simulated order book."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "kalman-filter",
    "particle-filter",
    "ensemble-kalman-filter",
    "stochastic-volatility",
    "order-book",
    "market-simulation",
    "timers",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["tradelab"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
