[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spongeutil"
version = "0.1.0"
description = "IPv4 socket addresses, shared byte buffers, file descriptor handles and a poll-based event loop"
requires-python = ">=3.10"
dependencies = []
keywords = ["networking", "poll", "event loop", "file descriptor", "buffer", "ipv4"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["spongeutil"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
