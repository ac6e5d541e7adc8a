"""
Library state and the messages that transition it.

The state is only ever replaced through :func:`reduce`, which is pure: it
takes the current state and a message and returns the next state.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Tuple, Union

from .models import LibraryState
from .versions import NO_VERSION, filter_versions, sort_versions


PREFLIGHT = "preflight"
LOADING = "loading"
DONE = "done"
FAILED = "failed"

DEFAULT_PACKAGE = "@material-ui/core"


@dataclass(frozen=True)
class NameChange:
    name: str


@dataclass(frozen=True)
class VersionStartChange:
    version: str


@dataclass(frozen=True)
class VersionEndChange:
    version: str


@dataclass(frozen=True)
class FetchingVersions:
    pass


@dataclass(frozen=True)
class FetchedVersions:
    versions: Tuple[str, ...]


@dataclass(frozen=True)
class FetchFailed:
    error: str


Action = Union[
    NameChange,
    VersionStartChange,
    VersionEndChange,
    FetchingVersions,
    FetchedVersions,
    FetchFailed,
]


def initial_state(name: str = DEFAULT_PACKAGE) -> LibraryState:
    return LibraryState(name=name)


def _unique(versions) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(versions))


def reduce(state: LibraryState, action: Action) -> LibraryState:
    """Return the state that follows ``state`` once ``action`` is applied.

    Raises:
        TypeError: ``action`` is not one of the known messages.
    """
    if isinstance(action, NameChange):
        return replace(
            state,
            name=action.name,
            version_start=NO_VERSION,
            version_end=NO_VERSION,
            versions=(),
            versions_state=PREFLIGHT,
            error=None,
        )
    if isinstance(action, VersionStartChange):
        return replace(state, version_start=action.version)
    if isinstance(action, VersionEndChange):
        return replace(state, version_end=action.version)
    if isinstance(action, FetchingVersions):
        return replace(state, versions_state=LOADING, error=None)
    if isinstance(action, FetchedVersions):
        return replace(
            state,
            versions=_unique(action.versions),
            versions_state=DONE,
            error=None,
        )
    if isinstance(action, FetchFailed):
        return replace(state, versions=(), versions_state=FAILED, error=action.error)
    raise TypeError(f"unknown action '{type(action).__name__}'")


def is_loading(state: LibraryState) -> bool:
    return state.versions_state in (PREFLIGHT, LOADING)


def selected_versions(state: LibraryState) -> List[str]:
    """Versions of the package that fall inside the chosen range."""
    return filter_versions(state.versions, state.version_start, state.version_end)


def version_choices(state: LibraryState) -> List[str]:
    """Options for the range endpoints: the unbounded sentinel, then newest first."""
    return [NO_VERSION] + sort_versions(state.versions, reverse=True)
