[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "msfusion"
version = "0.1.0"
description = "Building blocks for time-delay compensated multi-sensor fusion: quaternion tools, time-sorted buffers, GPS frame conversion, similarity transforms and fuzzy-tracking checks."
requires-python = ">=3.10"
keywords = ["sensor fusion", "ekf", "quaternion", "gps", "enu", "similarity transform", "robotics"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]
dependencies = [
    "numpy",
    "sortedcontainers",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["msfusion"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
