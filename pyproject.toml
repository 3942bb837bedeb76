[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "solarb"
version = "1.0.0"
description = "Pool models, account layouts and swap instruction builders for on-chain token arbitrage"
requires-python = ">=3.10"
dependencies = []
keywords = ["arbitrage", "amm", "swap", "token", "orca", "raydium", "jupiter", "base58"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["solarb"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
