[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "metrix"
version = "0.1.0"
description = "A small web application for recording and browsing personal metrics"
requires-python = ">=3.10"
dependencies = []
keywords = ["metrics", "tracking", "wsgi", "htmx", "web"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
metrix = "metrix.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["metrix"]

[tool.pytest.ini_options]
addopts = "-ra"
