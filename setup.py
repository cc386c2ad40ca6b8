# setup.py - Combination index package
from setuptools import setup, find_packages

setup(
    name="combination-index",
    version="0.1.0",
    description="Hash table counting unique combinations of integers",
    packages=find_packages(include=["combination_index", "combination_index.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "pandas",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
