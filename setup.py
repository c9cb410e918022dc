"""
Setup script for navplan grid and navmesh path planning tools.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text() if readme_file.exists() else ""

setup(
    name="navplan",
    version="0.1.0",
    description="Grid and navmesh path planning (A*, Dijkstra, Greedy, JPS, Theta*, RRT) with Rerun visualization",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="navplan developers",
    packages=find_packages(include=["navplan", "navplan.*"]),
    python_requires=">=3.8",
    install_requires=[
        "rerun-sdk>=0.16.0",
        "numpy>=1.20.0",
        "pillow>=8.0.0",
        "scipy>=1.7.0",
        "tqdm>=4.60.0",
        "loguru>=0.6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
