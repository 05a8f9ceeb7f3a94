"""Tests for compiler version parsing."""

import pytest

from solcfg.domain.versions import parse_version


class TestParseVersion:
    def test_components(self) -> None:
        assert parse_version("0.8.9") == (0, 8, 9)
        assert parse_version("10.0.123") == (10, 0, 123)

    def test_leading_zeros_allowed(self) -> None:
        assert parse_version("0.08.09") == (0, 8, 9)

    @pytest.mark.parametrize("version", ["latest", "8.9", "0.8.9-rc1", "0.8.9+commit", "a.b.c"])
    def test_rejects_non_release_strings(self, version: str) -> None:
        with pytest.raises(ValueError, match="major.minor.patch"):
            parse_version(version)

    def test_rejects_non_ascii_digits(self) -> None:
        with pytest.raises(ValueError):
            parse_version("٠.٨.٩")
