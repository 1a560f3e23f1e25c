[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gpusched"
version = "0.1.0"
description = "Hyperparameter search spaces and accelerator defragmentation for GPU cluster scheduling experiments"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "gpu",
    "scheduling",
    "cluster",
    "defragmentation",
    "hyperparameter",
    "search-space",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gpusched"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
