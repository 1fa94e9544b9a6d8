"""
Setup script for zkmerkle.

The version is read from the VERSION file at the repository root.
"""

from pathlib import Path
from setuptools import find_packages, setup

# Read version from VERSION file
version_file = Path(__file__).parent / "VERSION"
version = version_file.read_text().strip()

setup(
    name="zkmerkle",
    version=version,
    description="Merkle tree commitments and inclusion proofs for zero-knowledge circuits",
    python_requires=">=3.9",
    packages=find_packages(include=["zkmerkle", "zkmerkle.*"]),
    install_requires=[
        "click>=8.0",
        "cryptography>=41.0",
        "PyYAML>=6.0",
        "rich>=13.0",
        "structlog>=23.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
    entry_points={
        "console_scripts": [
            "zkmerkle=zkmerkle.cli.main:cli",
        ],
    },
)
