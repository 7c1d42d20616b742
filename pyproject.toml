[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nullcheck"
version = "0.1.0"
description = "Static null-dereference detection over a small SSA-style intermediate representation"
requires-python = ">=3.10"
dependencies = []
keywords = ["static-analysis", "null-dereference", "pointer-analysis", "ir"]
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
    "Topic :: Software Development :: Quality Assurance",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["nullcheck"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
