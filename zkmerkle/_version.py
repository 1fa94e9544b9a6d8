"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
zkmerkle, a product of Garudex Labs

Version information for zkmerkle.

Reads the version from the VERSION file at the root of the source tree, or
from the installed distribution metadata when the file is not shipped.
"""

from importlib import metadata
from pathlib import Path

def get_version() -> str:
    """
    Read version from VERSION file.
    
    Returns:
        str: The version string (e.g., "0.1.0")
    """
    version_file = Path(__file__).parent.parent / "VERSION"
    if version_file.exists():
        return version_file.read_text().strip()
    try:
        return metadata.version("zkmerkle")
    except metadata.PackageNotFoundError:
        return "unknown"

__version__ = get_version()
