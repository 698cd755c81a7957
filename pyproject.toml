[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jobshell"
version = "0.1.0"
description = "A small interactive Unix shell with job control, respawnable jobs, timed kills, delayed launches and signal masks"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "job control", "unix", "signals", "process groups"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
jobshell = "jobshell.shell:main"

[tool.hatch.build.targets.wheel]
packages = ["jobshell"]

[tool.pytest.ini_options]
addopts = "-ra"
