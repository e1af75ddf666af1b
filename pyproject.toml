[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wasmsections"
version = "0.1.0"
description = "In-memory model of WebAssembly module sections: custom sections, data and element segments, exports and debug address mapping"
requires-python = ">=3.10"
dependencies = []
keywords = ["webassembly", "wasm", "sections", "dwarf", "exports", "data segments"]
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

[tool.hatch.build.targets.wheel]
packages = ["wasmsections"]

[tool.pytest.ini_options]
addopts = "-ra"
