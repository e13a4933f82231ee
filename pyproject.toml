[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "qgit"
version = "0.1.0"
description = "A simplified git-like version control system"
requires-python = ">=3.10"
dependencies = []
keywords = ["git", "version-control", "vcs", "objects", "ini"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
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
qgit = "qgit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["qgit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
