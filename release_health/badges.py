"""
Compatibility badge and score page URLs.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlencode

from .config import Endpoints
from .models import Badge


def _pair_query(name: str, previous: str, new: str, endpoints: Endpoints) -> str:
    return urlencode(
        [
            ("dependency-name", name),
            ("package-manager", endpoints.package_manager),
            ("previous-version", previous),
            ("new-version", new),
        ]
    )


def badge_for(
    name: str, previous: str, new: str, endpoints: Optional[Endpoints] = None
) -> Badge:
    """Badge for upgrading ``name`` from ``previous`` to ``new``."""
    endpoints = endpoints or Endpoints()
    query = _pair_query(name, previous, new, endpoints)
    return Badge(
        image_url=f"{endpoints.badge_url}?{query}",
        link_url=f"{endpoints.score_url}?{query}",
        alt=f"compatibility score of {name} between version {previous} and {new}",
        title=f"{previous} - {new}",
    )


def overview_url(name: str, endpoints: Optional[Endpoints] = None) -> str:
    """Score page covering every release of ``name``."""
    endpoints = endpoints or Endpoints()
    query = urlencode(
        [
            ("dependency-name", name),
            ("package-manager", endpoints.package_manager),
            ("version-scheme", endpoints.version_scheme),
        ]
    )
    return f"{endpoints.score_url}?{query}"
