"""setuptools configuration for Timekeeper.

Install for development:
    pip install -e ".[test]"
"""

from setuptools import setup, find_packages

setup(
    name="Timekeeper",
    version="0.1.0",
    description="Count-up / countdown timer widget for PyQt6",
    packages=find_packages(include=["timekeeper", "timekeeper.*"]),
    python_requires=">=3.10",
    install_requires=["PyQt6"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["timekeeper = timekeeper.__main__:main"]},
)
