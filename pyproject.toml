[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mlpolycommit"
version = "0.1.0"
description = "Multilinear polynomials and polynomial commitment schemes (Pedersen, Hyrax) over the ristretto255 group"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "cryptography",
    "polynomial commitment",
    "multilinear polynomial",
    "hyrax",
    "pedersen",
    "ristretto255",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mlpolycommit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
