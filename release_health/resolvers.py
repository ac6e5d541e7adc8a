"""
npm registry client.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import requests

from .config import Endpoints
from .interfaces import VersionSource


logger = logging.getLogger(__name__)


class RegistryError(Exception):
    """The registry answered with something that is not package metadata."""


@dataclass
class ResolverCache:
    """In-memory cache of registry documents."""

    metadata_cache: Dict[str, Dict] = field(default_factory=dict)


class NpmRegistryClient(VersionSource):
    """Fetch package metadata from the npm registry."""

    ecosystem = "npm"

    def __init__(
        self,
        endpoints: Optional[Endpoints] = None,
        session: Optional[requests.Session] = None,
        cache: Optional[ResolverCache] = None,
    ) -> None:
        self.endpoints = endpoints or Endpoints()
        self.session = session or requests.Session()
        self.cache = cache or ResolverCache()

    def fetch_metadata(self, package_name: str) -> Dict:
        if not package_name:
            raise ValueError("package name must not be empty")

        if package_name in self.cache.metadata_cache:
            logger.debug("Cache hit: metadata %s:%s", self.ecosystem, package_name)
            return self.cache.metadata_cache[package_name]

        url = self.endpoints.package_url(package_name)
        logger.info("Fetching metadata for %s", package_name)
        with self.session.get(url, timeout=self.endpoints.timeout) as response:
            response.raise_for_status()
            try:
                data = response.json()
            except ValueError as e:
                raise RegistryError(f"Invalid registry response for {package_name}: {e}") from e

        if not isinstance(data, dict):
            raise RegistryError(f"Unexpected registry document for {package_name}")
        self.cache.metadata_cache[package_name] = data
        return data

    def fetch_versions(self, package_name: str) -> List[str]:
        """Return every published version of ``package_name``, unordered."""
        metadata = self.fetch_metadata(package_name)
        versions = metadata.get("versions") or {}
        if not isinstance(versions, dict):
            raise RegistryError(f"Unexpected versions mapping for {package_name}")
        return list(versions.keys())

    def close(self) -> None:
        self.session.close()
