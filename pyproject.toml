[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "trilogywire"
version = "0.1.0"
description = "Building blocks for speaking the MySQL-compatible client/server wire protocol"
requires-python = ">=3.10"
dependencies = []
keywords = ["mysql", "protocol", "wire", "packets", "database", "client"]
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
    "Topic :: Database :: Front-Ends",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["trilogywire"]

[tool.hatch.build.targets.sdist]
include = ["trilogywire", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
