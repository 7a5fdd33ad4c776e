[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "formantscope"
version = "0.1.0"
description = "Speech analysis building blocks: glottal source and noise synthesis, IIR filtering, processing nodes and spectrogram axis and colour mapping"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["speech", "formants", "pitch", "spectrogram", "lpc", "glottal", "audio", "filter"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["formantscope"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
