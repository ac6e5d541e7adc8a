"""
Remote endpoints used by release health.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Endpoints:
    """Registry, proxy and badge service locations."""

    registry_url: str = "https://registry.npmjs.org"
    # CORS proxy in front of the registry; an empty string talks to it directly.
    proxy_url: str = "https://test.cors.workers.dev/?"
    badge_url: str = "https://api.dependabot.com/badges/compatibility_score"
    score_url: str = "https://dependabot.com/compatibility-score/"
    package_manager: str = "npm_and_yarn"
    version_scheme: str = "semver"
    timeout: float = 30.0

    def with_overrides(self, **overrides) -> "Endpoints":
        """Return a copy with every non-None override applied."""
        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **values)

    def package_url(self, name: str) -> str:
        return f"{self.proxy_url}{self.registry_url.rstrip('/')}/{name}"
