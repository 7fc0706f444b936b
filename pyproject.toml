[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stvmconf"
version = "0.1.0"
description = "Parse, compile and export the boot configuration of an in-memory table store"
requires-python = ">=3.10"
dependencies = []
keywords = ["configuration", "in-memory database", "cluster", "domain", "boot"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Environment :: Console",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
stvmconf = "stvmconf.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["stvmconf"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
