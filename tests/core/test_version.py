"""
Unit tests for version resolution and validation.
"""

import pytest
import responses
from requests.exceptions import ConnectionError as RequestsConnectionError

from chromedriver_installer.core.exceptions import InvalidVersionError
from chromedriver_installer.core.version import (
    normalize_version,
    parse_constraints,
    resolve_version,
    validate_version,
)

BASE_URL = "https://chromedriver.storage.googleapis.com"
LATEST_URL = f"{BASE_URL}/LATEST_RELEASE"


class TestResolveVersion:
    """Test resolve_version function."""

    @responses.activate
    def test_explicit_version_used_verbatim(self):
        """Test explicit version is returned without any request."""
        assert resolve_version("^2.0", base_url=BASE_URL) == "^2.0"
        assert len(responses.calls) == 0

    @responses.activate
    def test_latest_release_is_fetched(self):
        """Test missing version is resolved from LATEST_RELEASE."""
        responses.add(responses.GET, LATEST_URL, body="2.41\n", status=200)

        assert resolve_version(None, base_url=BASE_URL) == "2.41"
        assert len(responses.calls) == 1

    @responses.activate
    def test_empty_string_resolves_latest(self):
        """Test empty version is treated like a missing one."""
        responses.add(responses.GET, LATEST_URL, body="  2.40 ", status=200)

        assert resolve_version("", base_url=BASE_URL) == "2.40"

    @responses.activate
    def test_http_error_yields_empty_string(self):
        """Test HTTP error status yields an empty version."""
        responses.add(responses.GET, LATEST_URL, body="Not Found", status=404)

        assert resolve_version(None, base_url=BASE_URL) == ""

    @responses.activate
    def test_connection_error_yields_empty_string(self):
        """Test network failure yields an empty version."""
        responses.add(responses.GET, LATEST_URL, body=RequestsConnectionError("offline"))

        assert resolve_version(None, base_url=BASE_URL) == ""


class TestValidateVersion:
    """Test validate_version function."""

    @pytest.mark.parametrize(
        "version",
        [
            "2.41",
            "2.41.578700",
            "76.0.3809.126",
            "^2.0",
            "~2.4",
            "~2.4.1",
            ">=2.40 <3.0",
            ">=2.40,<3.0",
            ">= 2.40",
            "2.*",
            "2.x",
            "*",
            "2.40 - 2.41",
            "2.41 || 2.42",
            "2.41 | 2.42",
            "v2.41",
            "2.41@stable",
            "!=2.40",
            "<>2.40",
            "=2.41",
            "1.0-beta2",
            "1.0.0-RC1",
            "1.0p1",
            "dev-master",
            "master",
            "1.0 as 2.0",
        ],
    )
    def test_accepts_valid_constraints(self, version):
        """Test valid versions and constraints are accepted."""
        validate_version(version)

    @pytest.mark.parametrize(
        "version",
        [
            "not-a-version!!",
            "",
            "   ",
            "latest",
            "2.41.1.1.1",
            ">=",
            "2.41 ||",
            "1.0,",
            "^",
            "~abc",
        ],
    )
    def test_rejects_invalid_constraints(self, version):
        """Test malformed strings raise InvalidVersionError."""
        with pytest.raises(InvalidVersionError):
            validate_version(version)

    def test_error_carries_offending_string(self):
        """Test error exposes the rejected string in message and attribute."""
        with pytest.raises(InvalidVersionError) as exc_info:
            validate_version("not-a-version!!")

        assert exc_info.value.version == "not-a-version!!"
        assert str(exc_info.value) == 'Incorrect version string: "not-a-version!!"'


class TestParseConstraints:
    """Test parse_constraints bounds."""

    def test_exact_version(self):
        assert parse_constraints("2.41") == [[("==", "2.41")]]

    def test_caret(self):
        assert parse_constraints("^2.0") == [[(">=", "2.0"), ("<", "3")]]

    def test_caret_zero_major(self):
        assert parse_constraints("^0.3") == [[(">=", "0.3"), ("<", "0.4")]]

    def test_tilde(self):
        assert parse_constraints("~2.4") == [[(">=", "2.4"), ("<", "3")]]
        assert parse_constraints("~2.4.1") == [[(">=", "2.4.1"), ("<", "2.5")]]

    def test_wildcards(self):
        assert parse_constraints("2.*") == [[(">=", "2"), ("<", "3")]]
        assert parse_constraints("*") == [[("*", "*")]]

    def test_hyphen_range(self):
        assert parse_constraints("2.40 - 2.41") == [[(">=", "2.40"), ("<=", "2.41")]]

    def test_and_or_groups(self):
        """Test AND within alternatives and OR between them."""
        assert parse_constraints(">=2.40,<3.0 || 3.1") == [
            [(">=", "2.40"), ("<", "3.0")],
            [("==", "3.1")],
        ]


class TestNormalizeVersion:
    """Test normalize_version function."""

    def test_strips_prefix(self):
        assert normalize_version("v2.41.578700") == "2.41.578700"

    def test_branch_names(self):
        assert normalize_version("dev-main") == "dev-main"
        assert normalize_version("master") == "dev-master"

    def test_stable_suffix(self):
        assert normalize_version("1.0-stable") == "1.0"

    def test_build_metadata_dropped(self):
        assert normalize_version("2.41+build.5") == "2.41"

    def test_error_reports_full_expression(self):
        with pytest.raises(InvalidVersionError) as exc_info:
            normalize_version("abc", "^abc")

        assert exc_info.value.version == "^abc"
