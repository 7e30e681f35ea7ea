[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gyromapper"
version = "0.1.0"
description = "Controller mapping building blocks: key codes, chorded settings, setting values, virtual gamepad reports, gyro maths and input helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["gamepad", "controller", "gyro", "mapping", "input", "keybinding", "quaternion"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gyromapper"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
