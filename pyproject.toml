[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "inkpanel"
version = "0.1.0"
description = "A small widget and frame toolkit for touch-driven e-paper panels, modelled in memory"
requires-python = ">=3.10"
dependencies = []
keywords = ["e-paper", "epd", "gui", "widgets", "touch", "eink"]
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
    "Topic :: Software Development :: User Interfaces",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["inkpanel"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
