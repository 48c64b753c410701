[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "cropsim"
version = "0.1.0"
description = "Process-based crop growth simulation with soil water balance and N, P, K nutrient dynamics"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "crop model",
    "agronomy",
    "simulation",
    "water balance",
    "evapotranspiration",
    "nutrients",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["cropsim*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
