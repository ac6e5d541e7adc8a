"""
Semantic-version parsing, ordering and range filtering for npm packages.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

import semantic_version


logger = logging.getLogger(__name__)

NO_VERSION = "none"


def parse_version(value: str) -> Optional[semantic_version.Version]:
    """Parse an npm version string, returning None when it is not valid semver.

    Surrounding whitespace and a single optional ``=`` then ``v`` prefix are
    accepted, as in npm strict mode; runs such as ``vvv1.0.0`` are rejected.
    """
    if not isinstance(value, str):
        return None
    cleaned = value.strip()
    if cleaned.startswith("="):
        cleaned = cleaned[1:]
    if cleaned.startswith("v"):
        cleaned = cleaned[1:]
    if not cleaned:
        return None
    try:
        return semantic_version.Version(cleaned)
    except ValueError:
        return None


def npm_semver_key(value: str) -> Optional[Tuple]:
    """Return a sort key following semver precedence, or None for malformed input.

    Build metadata does not take part in the ordering and pre-releases sort
    before their release.
    """
    parsed = parse_version(value)
    if parsed is None:
        return None
    return parsed.truncate("prerelease").precedence_key


def sort_versions(versions: Iterable[str], reverse: bool = False) -> List[str]:
    """Deduplicate versions, drop malformed ones and order them by precedence."""
    keyed = []
    seen = set()
    for version in versions:
        if version in seen:
            continue
        seen.add(version)
        key = npm_semver_key(version)
        if key is None:
            logger.debug("Skipping malformed version %r", version)
            continue
        keyed.append((key, version))
    keyed.sort(key=lambda item: item[0], reverse=reverse)
    return [version for _, version in keyed]


def _range_bound(value: str) -> str:
    parsed = parse_version(value)
    if parsed is None:
        # Left as typed so that the range fails validation.
        return value
    return str(parsed.truncate("prerelease"))


def build_range(start: str, end: str) -> Optional[str]:
    """Build an npm range expression from two endpoints.

    ``"none"`` on a side leaves that side unbounded. Returns None when both
    sides are unbounded.
    """
    start_open = not start or start == NO_VERSION
    end_open = not end or end == NO_VERSION
    if start_open and end_open:
        return None
    if start_open:
        return f"<={_range_bound(end)}"
    if end_open:
        return f">={_range_bound(start)}"
    return f"{_range_bound(start)} - {_range_bound(end)}"


def parse_range(expression: str) -> Optional[semantic_version.NpmSpec]:
    """Parse an npm range expression, returning None when it is invalid."""
    try:
        return semantic_version.NpmSpec(expression)
    except (ValueError, AttributeError):
        # NpmSpec fails with AttributeError on some non-version blocks.
        return None


def is_valid_range(expression: str) -> bool:
    return parse_range(expression) is not None


def filter_versions(all_versions: Iterable[str], start: str, end: str) -> List[str]:
    """Return the entries of ``all_versions`` that fall inside ``[start, end]``.

    An invalid or incomplete range yields an empty list rather than an error,
    since that is a normal intermediate state while a range is being picked.
    Malformed entries are never returned. Input order is preserved.
    """
    for endpoint in (start, end):
        if endpoint and endpoint != NO_VERSION and parse_version(endpoint) is None:
            logger.debug("Ignoring range with non-version endpoint %r", endpoint)
            return []

    expression = build_range(start, end)
    if expression is None:
        return [version for version in all_versions if parse_version(version) is not None]

    spec = parse_range(expression)
    if spec is None:
        logger.debug("Ignoring invalid range %r", expression)
        return []

    selected = []
    for version in all_versions:
        parsed = parse_version(version)
        if parsed is None:
            continue
        if spec.match(parsed.truncate("prerelease")):
            selected.append(version)
    return selected
