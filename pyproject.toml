[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pagekit"
version = "0.1.0"
description = "Models of low-level kernel building blocks: a red-black tree, a block allocator, x86 page directories, descriptor encoding, PIC control and a VGA text terminal"
requires-python = ">=3.10"
dependencies = []
keywords = ["kernel", "paging", "allocator", "red-black tree", "gdt", "idt", "pic", "vga"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System Kernels",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pagekit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
