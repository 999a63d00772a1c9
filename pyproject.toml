[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pluckysynth"
version = "0.1.0"
description = "A polyphonic Karplus-Strong plucked-string synthesizer with low cut, tremolo, reverb and WAV rendering"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "synthesizer",
    "karplus-strong",
    "plucked-string",
    "audio",
    "dsp",
    "reverb",
    "wav",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Environment :: Console",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pluckysynth = "pluckysynth.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["pluckysynth"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
