[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "msgvalue"
version = "0.1.0"
description = "A dynamic MessagePack value model: integers, strings that may hold invalid UTF-8, binaries, arrays, maps and extension types."
requires-python = ">=3.10"
dependencies = []
keywords = ["msgpack", "messagepack", "value", "data model"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["msgvalue"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
