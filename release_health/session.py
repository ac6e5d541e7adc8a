"""
Fetch lifecycle for the package being inspected.

Each name change starts a new generation. A fetch is tagged with the
generation it was started in and may only commit its result while that
generation is still current, so the latest request always wins. Nothing is
aborted; a superseded response is simply dropped when it arrives.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

import requests

from .interfaces import VersionSource
from .models import LibraryState
from .resolvers import RegistryError
from .state import (
    Action,
    FetchedVersions,
    FetchFailed,
    FetchingVersions,
    NameChange,
    VersionEndChange,
    VersionStartChange,
    initial_state,
    reduce,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchTicket:
    """Identifies one fetch and the generation it belongs to."""

    generation: int
    name: str


class ReleaseHealthSession:
    """Owns the library state and the fetches that feed it."""

    def __init__(self, client: VersionSource, state: Optional[LibraryState] = None) -> None:
        self.client = client
        self.state = state or initial_state()
        self.generation = 0
        self.closed = False

    def __enter__(self) -> "ReleaseHealthSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def dispatch(self, action: Action) -> LibraryState:
        self.state = reduce(self.state, action)
        return self.state

    def change_name(self, name: str) -> LibraryState:
        self.generation += 1
        return self.dispatch(NameChange(name))

    def select_range(self, start: str, end: str) -> LibraryState:
        self.dispatch(VersionStartChange(start))
        return self.dispatch(VersionEndChange(end))

    def begin_fetch(self) -> FetchTicket:
        self.dispatch(FetchingVersions())
        return FetchTicket(generation=self.generation, name=self.state.name)

    def is_current(self, ticket: FetchTicket) -> bool:
        return not self.closed and ticket.generation == self.generation

    def complete_fetch(self, ticket: FetchTicket, versions: Iterable[str]) -> bool:
        """Commit fetched versions if ``ticket`` is still current."""
        if not self.is_current(ticket):
            logger.debug("Discarding stale versions for %s", ticket.name)
            return False
        self.dispatch(FetchedVersions(tuple(versions)))
        return True

    def fail_fetch(self, ticket: FetchTicket, error: str) -> bool:
        """Record a failed fetch if ``ticket`` is still current."""
        if not self.is_current(ticket):
            logger.debug("Discarding stale failure for %s: %s", ticket.name, error)
            return False
        self.dispatch(FetchFailed(error))
        return True

    def load_versions(self) -> bool:
        """Fetch the versions of the current package and commit them.

        Returns whether the result was committed. Registry errors are recorded
        in the state and then re-raised.
        """
        ticket = self.begin_fetch()
        try:
            versions = self.client.fetch_versions(ticket.name)
        except (requests.RequestException, RegistryError, ValueError) as e:
            logger.warning("Failed to fetch versions for %s: %s", ticket.name, e)
            self.fail_fetch(ticket, str(e))
            raise
        return self.complete_fetch(ticket, versions)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self.client.close()
