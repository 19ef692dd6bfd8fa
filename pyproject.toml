[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "netsim"
version = "1.1.0"
description = "Discrete-event network emulator with Go-Back-N and Selective Repeat reliable transport protocols"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "network",
    "simulation",
    "emulator",
    "go-back-n",
    "selective-repeat",
    "transport",
    "protocol",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
netsim = "netsim.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["netsim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
