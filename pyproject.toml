[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flarereco"
version = "0.1.0"
description = "Reconstruction tools for forward neutrino detectors: circle, line and parabolic fits, PCA direction finding and longitudinal shower profiles"
requires-python = ">=3.10"
keywords = ["physics", "reconstruction", "neutrino", "tracking", "pca", "circle-fit"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["flarereco"]

[tool.pytest.ini_options]
addopts = "-ra"
