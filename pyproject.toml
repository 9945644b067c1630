[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dominant_speaker"
version = "0.3.0"
description = "Dominant speaker identification for multipoint audio/video conferencing from RFC 6464 audio levels."
requires-python = ">=3.10"
dependencies = []
keywords = ["webrtc", "sfu", "audio", "speaker", "active-speaker", "conferencing"]
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
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
    "Topic :: Communications :: Conferencing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dominant_speaker"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
