from __future__ import annotations

from setuptools import setup

from tagbump.version import PROJECT_VERSION, REQUIRES_PYTHON

if __name__ == "__main__":
    setup(
        name="tagbump",
        version=PROJECT_VERSION,
        description="Create the next semantic version git tag",
        python_requires=REQUIRES_PYTHON,
        packages=["tagbump"],
        install_requires=[
            "loguru>=0.7",
            "pydantic>=2.0",
            "python-dotenv>=1.0",
            "tomli>=2.0; python_version < '3.11'",
        ],
        extras_require={
            "test": [
                "pytest>=7.0",
                "hypothesis>=6.0",
            ],
        },
        entry_points={
            "console_scripts": [
                "tagbump=tagbump.cli:main",
            ],
        },
    )
