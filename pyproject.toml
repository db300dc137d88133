[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sioutil"
version = "0.1.0"
description = "Socket.IO style message model, timers, threading helpers, minimal Opus stream framing, WAV and file utilities"
requires-python = ">=3.10"
dependencies = []
keywords = ["socket.io", "message", "wav", "pcm", "opus", "timer", "threading"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sioutil"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
