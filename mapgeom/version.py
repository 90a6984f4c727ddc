#!/usr/bin/env python3
# mapgeom/version.py
"""
Version and build metadata for mapgeom.
"""

__version__ = "1.0.0"
__build__ = "2026-10-17"
__license__ = "MIT"

def version_info() -> str:
    """Return human-readable version string."""
    return f"mapgeom v{__version__} (build {__build__})"
