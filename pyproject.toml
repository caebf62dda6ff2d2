[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rustique"
version = "0.1.0"
description = "A small layered raster paint program with undo/redo, flood fill and its own JSON project format"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["paint", "drawing", "raster", "layers", "image-editor", "tkinter"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Environment :: Win32 (MS Windows)",
    "Environment :: MacOS X",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: English",
    "Natural Language :: French",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Editors :: Raster-Based",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
rustique = "rustique.gui:main"

[tool.hatch.build.targets.wheel]
packages = ["rustique"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
