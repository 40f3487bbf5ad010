"""Setup script for entropynet package."""

from setuptools import setup, find_packages

setup(
    name="entropynet",
    version="1.0.0",
    description="Connected components and subgraph structure of weighted association networks",
    author="Roy Wollman",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.20",
        "pandas>=1.3",
        "scipy>=1.7",
        "pyyaml>=5.4",
        "click>=8.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "entropynet=entropynet.cli.main:cli",
        ],
    },
)
