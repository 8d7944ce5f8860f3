"""Tests for tag type resolution from serial numbers."""
from tagvault.core.capacity import DEFAULT_TAG_TYPE
from tagvault.core.tag_resolver import parse_tag_type, resolve
from tagvault.models.capacity import TagTypeId


def test_fallback_to_default() -> None:
    assert resolve(None) == resolve("") == resolve("unrecognized-xyz") == DEFAULT_TAG_TYPE


def test_markers() -> None:
    assert resolve("tag-213-a") is TagTypeId.NTAG213
    assert resolve("ntag215") is TagTypeId.NTAG215
    assert resolve("x216") is TagTypeId.NTAG216


def test_largest_marker_wins_when_both_present() -> None:
    assert resolve("213-then-216") is TagTypeId.NTAG216
    assert resolve("215:213") is TagTypeId.NTAG215


def test_nxp_uid_product_bytes() -> None:
    assert resolve("04010412345678") is TagTypeId.NTAG213
    assert resolve("04:01:03:aa:bb:cc:dd") is TagTypeId.NTAG215
    assert resolve("04010289abcdef") is TagTypeId.NTAG216


def test_unknown_nxp_uid_falls_back_to_default() -> None:
    assert resolve("04a1b2c3d4e5f6") is DEFAULT_TAG_TYPE
    assert resolve("04a1b2c3") is DEFAULT_TAG_TYPE


def test_mifare_classic_uid() -> None:
    assert resolve("08a1b2c3") is TagTypeId.MIFARE_CLASSIC


def test_override_takes_precedence() -> None:
    assert resolve("ntag216", override="ntag213") is TagTypeId.NTAG213
    assert resolve(None, override="mifare_classic") is TagTypeId.MIFARE_CLASSIC


def test_unknown_override_is_ignored() -> None:
    assert resolve("ntag216", override="bogus") is TagTypeId.NTAG216


def test_parse_tag_type() -> None:
    assert parse_tag_type(" ntag215 ") is TagTypeId.NTAG215
    assert parse_tag_type("Mifare_Ultralight") is TagTypeId.MIFARE_ULTRALIGHT
    assert parse_tag_type("") is None
    assert parse_tag_type("nope") is None
