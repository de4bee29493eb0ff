[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pngcodec"
version = "0.1.0"
description = "Building blocks for PNG and APNG images: chunk types, Adam7 interlacing, pixel formats and image metadata."
requires-python = ">=3.10"
dependencies = []
keywords = ["png", "apng", "image", "adam7", "interlace", "chunk"]
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
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pngcodec"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
