[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zepto"
version = "0.1.0"
description = "A small terminal text editor with nano-like and vim-like key bindings"
requires-python = ">=3.11"
keywords = ["editor", "terminal", "text", "vim", "nano", "curses"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console :: Curses",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Editors",
]
dependencies = [
    "platformdirs",
    "tomli-w",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
zepto = "zepto.app:main"

[tool.hatch.build.targets.wheel]
packages = ["zepto"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"
