from setuptools import find_packages, setup

setup(
    name="patchcheck",
    version="0.3.0",
    description="Verify that a patch archive can be applied to a published release",
    author="Patchcheck Developers",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "rich",  # Terminal formatting and prompts
        "typer",  # CLI
        "click",  # Exit and usage exceptions raised by typer apps
        "pydantic>=2",  # Configuration validation
        "jinja2",  # Template rendering for summary reports
        "bsdiff4",  # Binary patch size estimates
    ],
    extras_require={
        "test": [
            "pytest>=7.0",  # Testing framework
            "pytest-timeout>=2.1",  # Test timeouts
            "pytest-xdist>=3.0",  # Parallel test execution
        ],
        "dev": [
            "pre-commit",  # Git hook management
            "ruff",  # Linting and formatting
            "mypy",  # Static type checking
        ],
    },
    entry_points={
        "console_scripts": [
            "patchcheck=patchcheck.cli:main",
        ],
    },
)
