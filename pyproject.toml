[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rcshell"
version = "1.7.4"
description = "Pieces of the rc command shell: tokenizer, wildcard matching, exit statuses, signals, formatting, parse trees, command lookup, child tracking and a history tool"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "rc", "lexer", "wildcard", "history", "signals"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: System Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
rc-history = "rcshell.history:main"

[tool.hatch.build.targets.wheel]
packages = ["rcshell"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
