[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cacheproxy"
version = "0.1.0"
description = "Building blocks for a caching HTTP proxy: an LRU/LFU object cache, a bounded thread-safe queue, robust socket I/O, and a sample CGI adder"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "proxy", "cache", "lru", "lfu", "cgi", "socket"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: Proxy Servers",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content :: CGI Tools/Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
cacheproxy-adder = "cacheproxy.adder:main"

[tool.hatch.build.targets.wheel]
packages = ["cacheproxy"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
