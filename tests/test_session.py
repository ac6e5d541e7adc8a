"""Tests for the fetch lifecycle."""

import pytest
import requests

from release_health.session import ReleaseHealthSession
from release_health.state import DONE, FAILED, LOADING


class FakeClient:
    def __init__(self, versions=None, error=None):
        self.versions = versions or {}
        self.error = error
        self.calls = []
        self.closed = False

    def fetch_metadata(self, package_name):
        return {"versions": {v: {} for v in self.versions.get(package_name, [])}}

    def fetch_versions(self, package_name):
        self.calls.append(package_name)
        if self.error is not None:
            raise self.error
        return list(self.versions.get(package_name, []))

    def close(self):
        self.closed = True


def test_load_versions_commits_result():
    client = FakeClient({"react": ["16.0.0", "17.0.0"]})
    session = ReleaseHealthSession(client)

    session.change_name("react")
    assert session.load_versions() is True

    assert client.calls == ["react"]
    assert session.state.versions_state == DONE
    assert session.state.versions == ("16.0.0", "17.0.0")


def test_stale_fetch_is_discarded():
    session = ReleaseHealthSession(FakeClient())
    session.change_name("react")
    stale = session.begin_fetch()

    session.change_name("vue")
    current = session.begin_fetch()

    assert session.complete_fetch(stale, ["16.0.0"]) is False
    assert session.state.name == "vue"
    assert session.state.versions == ()
    assert session.state.versions_state == LOADING

    assert session.complete_fetch(current, ["3.0.0"]) is True
    assert session.state.versions == ("3.0.0",)


def test_name_change_during_fetch_drops_response():
    session = None

    class RacingClient(FakeClient):
        def fetch_versions(self, package_name):
            # The user types a new name while the request is in flight.
            session.change_name("vue")
            return ["16.0.0"]

    session = ReleaseHealthSession(RacingClient())
    session.change_name("react")

    assert session.load_versions() is False
    assert session.state.name == "vue"
    assert session.state.versions == ()


def test_failed_fetch_records_error_and_reraises():
    client = FakeClient(error=requests.ConnectionError("offline"))
    session = ReleaseHealthSession(client)
    session.change_name("react")

    with pytest.raises(requests.ConnectionError):
        session.load_versions()

    assert session.state.versions_state == FAILED
    assert "offline" in session.state.error


def test_stale_failure_is_ignored():
    session = ReleaseHealthSession(FakeClient())
    session.change_name("react")
    stale = session.begin_fetch()
    session.change_name("vue")

    assert session.fail_fetch(stale, "boom") is False
    assert session.state.error is None


def test_close_invalidates_tickets_and_closes_client():
    client = FakeClient()
    with ReleaseHealthSession(client) as session:
        session.change_name("react")
        ticket = session.begin_fetch()

    assert client.closed
    assert session.complete_fetch(ticket, ["1.0.0"]) is False


def test_select_range_updates_state():
    session = ReleaseHealthSession(FakeClient())
    state = session.select_range("1.0.0", "2.0.0")

    assert (state.version_start, state.version_end) == ("1.0.0", "2.0.0")
