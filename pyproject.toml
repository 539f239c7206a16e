[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lsdeluxe"
version = "0.1.0"
description = "Building blocks for a colourful ls-style directory lister: options, configuration and column layout"
requires-python = ">=3.10"
keywords = ["ls", "directory", "listing", "terminal", "grid", "tree", "configuration"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
    "Topic :: Utilities",
]
dependencies = [
    "pyyaml",
    "wcwidth",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["lsdeluxe"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
