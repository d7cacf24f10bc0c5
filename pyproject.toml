[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "geno"
version = "0.1.0"
description = "Workspaces, projects, build matrices and GCC/MSVC command lines for C and C++ code"
requires-python = ">=3.10"
dependencies = []
keywords = ["build", "compiler", "gcc", "msvc", "workspace", "project", "gcl"]
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
    "Programming Language :: C",
    "Programming Language :: C++",
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["geno"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
