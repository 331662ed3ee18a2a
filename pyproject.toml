[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "paniq"
version = "0.1.0"
description = "Building blocks for an obfuscated UDP/QUIC proxy transport: replay filters, rate limiting, padded transport payloads and encrypted timestamps"
requires-python = ">=3.10"
dependencies = [
    "pynacl",
]
keywords = [
    "proxy",
    "obfuscation",
    "quic",
    "udp",
    "replay-protection",
    "rate-limiting",
]
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
    "Topic :: Internet :: Proxy Servers",
    "Topic :: Security :: Cryptography",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["paniq"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
