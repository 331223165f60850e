[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "brptool"
version = "0.1.0"
description = "Helpers for tools that drive apps over the Bevy Remote Protocol: request parameters, SSE streams, port polling, binary lookup and detached-session records"
requires-python = ">=3.10"
keywords = ["bevy", "remote", "json-rpc", "debugging", "sse"]
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
    "Topic :: Software Development :: Debuggers",
]
dependencies = [
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["brptool"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
