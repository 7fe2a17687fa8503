[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "consultorio"
version = "0.1.0"
description = "Console appointment manager for a medical practice: doctors, specialties and appointments kept in local record files."
requires-python = ">=3.10"
dependencies = []
keywords = ["appointments", "clinic", "scheduling", "console", "medical"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Healthcare Industry",
    "Natural Language :: Spanish",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
consultorio = "consultorio.app:main"

[tool.hatch.build.targets.wheel]
packages = ["consultorio"]

[tool.pytest.ini_options]
addopts = "-ra"
