[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "substrate_primitives"
version = "0.1.0"
description = "Primitive types for building, encoding and signing Substrate extrinsics and RPC parameters"
requires-python = ">=3.10"
dependencies = []
keywords = ["substrate", "polkadot", "scale", "extrinsic", "rpc", "blockchain"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["substrate_primitives"]

[tool.pytest.ini_options]
addopts = "-ra"
