[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "soundweave"
version = "0.1.0"
description = "Pure-Python audio sample streams: buffers, channel and sample-rate conversion, mixing, queuing and WAV decoding"
requires-python = ">=3.10"
dependencies = []
keywords = ["audio", "pcm", "wav", "mixer", "resampling", "samples"]
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
    "Topic :: Multimedia :: Sound/Audio",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["soundweave"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
