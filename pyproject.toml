[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kindcfg"
version = "0.1.0"
description = "Kubeconfig management and node helper utilities for local Kubernetes-in-container clusters"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["kubernetes", "kubeconfig", "haproxy", "cluster", "proxy"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["kindcfg"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
