[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gitvendor"
version = "0.1.0"
description = "Vendor files from remote git repositories: URL parsing, pinned-commit sync, update checks and parallel processing."
requires-python = ">=3.10"
dependencies = []
keywords = ["git", "vendor", "vendoring", "dependencies", "lockfile"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Version Control :: Git",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gitvendor"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
