[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gapgraph"
version = "0.1.0"
description = "CSR graph construction, reordering and PageRank / connected-components kernels for graph-analytics benchmarking"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "graph",
    "csr",
    "pagerank",
    "connected-components",
    "benchmark",
    "shiloach-vishkin",
    "graph-reordering",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Benchmark",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gapgraph"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
