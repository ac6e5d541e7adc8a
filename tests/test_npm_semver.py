"""Tests for npm semver parsing."""

from release_health.versions import npm_semver_key, parse_version, sort_versions


def test_npm_semver_prerelease_sorting() -> None:
    versions = [
        "0.0.0-insiders.b4008fc",
        "0.0.0",
        "0.0.1",
        "0.0.1-alpha.1",
        "v1.2.3",
        "1.2.3+build.7",
        "1.0.0",
        "1.0.0-beta",
    ]

    keys = [(npm_semver_key(v), v) for v in versions]
    keys = [item for item in keys if item[0] is not None]
    keys.sort(key=lambda item: item[0])
    ordered = [v for _, v in keys]

    assert ordered[-1] in {"1.2.3+build.7", "v1.2.3"}
    assert ordered[-3] == "1.0.0"
    assert ordered[-4] == "1.0.0-beta"
    assert ordered[0] == "0.0.0-insiders.b4008fc"

    # v-prefix and build metadata should not affect ordering vs base version.
    assert npm_semver_key("v1.2.3") == npm_semver_key("1.2.3+build.7")


def test_malformed_versions_have_no_key() -> None:
    assert npm_semver_key("latest") is None
    assert npm_semver_key("1.0") is None
    assert npm_semver_key("") is None
    assert parse_version(None) is None


def test_parse_version_accepts_npm_prefixes() -> None:
    assert str(parse_version(" =1.2.3 ")) == "1.2.3"
    assert str(parse_version("v2.0.0-rc.1")) == "2.0.0-rc.1"


def test_sort_versions_deduplicates_and_drops_malformed() -> None:
    versions = ["2.0.0", "1.0.0", "not-a-version", "1.0.0", "1.0.0-beta"]

    assert sort_versions(versions) == ["1.0.0-beta", "1.0.0", "2.0.0"]
    assert sort_versions(versions, reverse=True) == ["2.0.0", "1.0.0", "1.0.0-beta"]


def test_numeric_prerelease_identifiers_compare_numerically() -> None:
    assert sort_versions(["1.0.0-alpha.10", "1.0.0-alpha.2", "1.0.0-alpha"]) == [
        "1.0.0-alpha",
        "1.0.0-alpha.2",
        "1.0.0-alpha.10",
    ]


def test_build_metadata_has_no_precedence() -> None:
    assert npm_semver_key("1.0.0+a") == npm_semver_key("1.0.0")
    assert npm_semver_key("1.0.0+a") == npm_semver_key("1.0.0+b")
    assert npm_semver_key("1.0.0-rc.1+a") < npm_semver_key("1.0.0")


def test_parse_version_accepts_only_a_single_prefix() -> None:
    assert str(parse_version("=v1.0.0")) == "1.0.0"
    assert parse_version("vvv1.0.0") is None
    assert parse_version("=v=1.0.0") is None
