[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "piq"
version = "0.1.0"
description = "Core data structures and front-end support for the piq compiler: bitsets, an open-addressing hash map, hashers, argument parsing, logging, diagnostics and builtin terms."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "compiler",
    "hashmap",
    "bitset",
    "diagnostics",
    "argument-parsing",
]
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
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["piq"]

[tool.hatch.build.targets.sdist]
include = ["piq", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
