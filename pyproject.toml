[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "geecache"
version = "0.1.0"
description = "A small distributed cache with LRU eviction, consistent hashing, request coalescing and HTTP peers"
requires-python = ">=3.10"
dependencies = []
keywords = ["cache", "distributed", "lru", "consistent-hashing", "singleflight", "wsgi"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
geecache = "geecache.server:main"

[tool.hatch.build.targets.wheel]
packages = ["geecache"]

[tool.pytest.ini_options]
addopts = "-ra"
