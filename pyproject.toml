[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "todolist"
version = "0.1.0"
description = "Todo items with per-user permissions, stored in a relational database."
requires-python = ">=3.10"
keywords = ["todo", "tasks", "permissions", "scheduling", "sqlalchemy"]
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
    "Framework :: AsyncIO",
    "Topic :: Database",
    "Topic :: Office/Business :: Scheduling",
]
dependencies = [
    "sqlalchemy>=2.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
    "pytest-asyncio>=0.23",
    "hypothesis>=6.90",
]

[tool.hatch.build.targets.wheel]
packages = ["todolist"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
packages = ["todolist"]
