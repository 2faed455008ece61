[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pocsema"
version = "0.1.0"
description = "Semantic analysis for a small statically typed language: syntax tree nodes, types, scopes and diagnostics"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "semantic analysis", "type checking", "ast", "scope"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pocsema"]

[tool.pytest.ini_options]
addopts = "-ra"
