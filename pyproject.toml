[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "inheritx"
version = "0.1.0"
description = "HTTP backend for notifications, user activities, claims, KYC records and withdrawal history"
requires-python = ">=3.10"
keywords = ["http", "rest", "api", "backend", "kyc", "claims", "notifications", "flask", "sqlite"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "flask",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
inheritx = "inheritx.app:main"

[tool.hatch.build.targets.wheel]
packages = ["inheritx"]

[tool.hatch.build.targets.sdist]
include = [
    "inheritx",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"
