"""
Release Health

Show dependabot compatibility scores between the releases of an npm package.
"""

__version__ = "0.1.0"

from .cli import main
from .matrix import build_matrix
from .versions import filter_versions

__all__ = ["main", "build_matrix", "filter_versions"]
