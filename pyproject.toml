[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jvc"
version = "0.1.0"
description = "A small snapshot-based version control tool with save, status, history and revert"
requires-python = ">=3.10"
dependencies = []
keywords = ["version control", "vcs", "snapshot", "backup", "cli"]
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
    "Topic :: Software Development :: Version Control",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
jvc = "jvc.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["jvc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
