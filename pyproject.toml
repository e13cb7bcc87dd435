[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minishlex"
version = "0.1.0"
description = "Tokenizer, token classifier and syntax-tree builder for a small shell command language"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "lexer", "tokenizer", "parser", "syntax-tree", "quotes"]
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
    "Topic :: System :: Shells",
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["minishlex"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
