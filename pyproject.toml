[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "skybox"
version = "0.1.0"
description = "Wire protocol codec, buffers and networking helpers for a client/server file transfer service"
requires-python = ">=3.10"
dependencies = []
keywords = ["file-transfer", "protocol", "codec", "networking", "asyncio"]
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
    "Topic :: Communications :: File Sharing",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["skybox"]

[tool.pytest.ini_options]
addopts = "-ra"
