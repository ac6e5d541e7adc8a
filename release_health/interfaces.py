"""
Interfaces for version sources.
"""

from __future__ import annotations

from typing import Dict, List, Protocol


class VersionSource(Protocol):
    """Provide the published versions of a package."""

    def fetch_metadata(self, package_name: str) -> Dict:
        ...

    def fetch_versions(self, package_name: str) -> List[str]:
        ...

    def close(self) -> None:
        ...
