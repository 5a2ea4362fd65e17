[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pointfish"
version = "0.1.0"
description = "Chess engine building blocks: bitboards, magic sliding-piece attacks, a xorshift64* generator and debugging helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["chess", "bitboard", "magic-bitboards", "xorshift", "debugging"]
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
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pointfish"]

[tool.pytest.ini_options]
addopts = "-ra"
