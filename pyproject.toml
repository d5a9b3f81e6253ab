[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "cloudmsgs"
version = "0.1.0"
description = "Point cloud message types, conversions, concatenation and rigid transforms"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["point cloud", "pointcloud2", "robotics", "transforms", "conversions"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.setuptools.packages.find]
include = ["cloudmsgs*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
