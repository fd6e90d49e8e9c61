[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "plotseries"
version = "0.1.0"
description = "Time series containers, natural sorting, CSV export and ZeroMQ streaming for plotting tools"
requires-python = ">=3.10"
dependencies = [
    "pyzmq",
]
keywords = ["timeseries", "plotting", "zeromq", "csv", "natural-sort"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pyzmq",
]

[tool.hatch.build.targets.wheel]
packages = ["plotseries"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
