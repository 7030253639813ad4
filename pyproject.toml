[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "agda-mode"
version = "0.1.9"
description = "Drive Agda's JSON interaction mode from Python, with a tactical command-line REPL"
requires-python = ">=3.10"
dependencies = []
keywords = ["agda", "proof-assistant", "repl", "interaction", "theorem-proving"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Interpreters",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[project.scripts]
agda-tac = "agda_mode.tac.main:main"

[tool.hatch.build.targets.wheel]
packages = ["agda_mode"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
