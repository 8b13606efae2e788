[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "engineone"
version = "0.1.0"
description = "Core pieces of a small game engine: vector and quaternion math, byte strings, an interactive console, a virtual file system and a client pool."
requires-python = ">=3.10"
dependencies = []
keywords = ["game-engine", "quaternion", "console", "vfs", "server"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["engineone"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
