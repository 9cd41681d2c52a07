[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tablegen_syntax"
version = "0.1.0"
description = "Error-tolerant lexer, preprocessor and concrete syntax tree parser for the TableGen language"
requires-python = ">=3.10"
dependencies = []
keywords = ["tablegen", "parser", "lexer", "syntax tree", "llvm"]
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

[project.scripts]
tablegen-parse = "tablegen_syntax.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tablegen_syntax"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
