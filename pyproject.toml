[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sniffcheck"
version = "0.2.1"
description = "Opinionated code-quality checks for TypeScript, React and Next.js projects"
requires-python = ">=3.10"
dependencies = []
keywords = ["typescript", "nextjs", "react", "code-quality", "bundle-size", "cli"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Quality Assurance",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sniff-bundle = "sniffcheck.bundle_report:main"
sniff-components = "sniffcheck.components_report:main"

[tool.hatch.build.targets.wheel]
packages = ["sniffcheck"]

[tool.pytest.ini_options]
addopts = "-ra"
