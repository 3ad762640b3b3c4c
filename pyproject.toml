[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dtlswire"
version = "0.1.0"
description = "Encoding and decoding of the DTLS wire format: records, handshake messages, alerts and hello extensions."
requires-python = ">=3.10"
dependencies = []
keywords = ["dtls", "tls", "protocol", "handshake", "record-layer", "srtp", "alpn"]
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
    "Topic :: Security :: Cryptography",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dtlswire"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
