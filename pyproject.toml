[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hashlookup"
version = "1.0.0"
description = "Build sorted hash index files from wordlists and look up hashes in them"
requires-python = ">=3.10"
dependencies = [
    "pycryptodome",
]
keywords = [
    "hash",
    "lookup table",
    "wordlist",
    "md5",
    "sha",
    "ntlm",
    "lm",
    "whirlpool",
    "index",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Information Technology",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
hashlookup = "hashlookup.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["hashlookup"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
