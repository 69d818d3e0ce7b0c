[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dcadec"
version = "0.2.0"
description = "DTS Coherent Acoustics stream reading, frame parsing and WAV output"
requires-python = ">=3.10"
dependencies = []
keywords = ["dts", "dca", "audio", "bitstream", "wav", "dts-hd"]
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
    "Topic :: Multimedia :: Sound/Audio :: Conversion",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dcadec"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
