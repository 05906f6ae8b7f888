"""
Setup script for learnpath.

learnpath is the progression and analytics engine behind the spelling
practice app. It serves three roles:

1. Curriculum Evaluator - Gated, ordered phase progression from mastery counts
2. Accuracy Aggregator - Category, pattern, origin and theme breakdowns
3. Recommendation Engine - Study plan, coaching cards and difficulty nudges

The 'learnpath' command renders a report from an exported practice snapshot.
"""

from setuptools import find_packages, setup

setup(
    name="learnpath",
    version="1.0.0",
    description="Curriculum progression and study recommendations for spelling practice",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "learnpath=learnpath.cli:run",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Education :: Computer Aided Instruction (CAI)",
    ],
    keywords="learning spaced-repetition spelling curriculum education",
)
