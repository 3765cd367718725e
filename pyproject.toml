[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "boltserve"
version = "1.0.0"
description = "Building blocks for a static-file HTTP server: path sanitising, virtual hosts and a worker thread pool"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "server", "static-files", "path-sanitising", "virtual-hosts", "thread-pool"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["boltserve"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
