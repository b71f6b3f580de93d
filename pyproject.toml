[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "plugbox"
version = "0.1.0"
description = "Chat-bot plugin helpers: emoji mixing, drift bottles, fortunes, gacha draws, repository search and more"
requires-python = ">=3.10"
keywords = ["chat", "bot", "plugins", "emoji", "gacha", "fortune"]
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
    "Topic :: Communications :: Chat",
]
dependencies = [
    "requests",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["plugbox"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
