"""Tests for record size estimation and the memory report."""
from tagvault.core.size_estimator import estimate_usage, size_of, size_of_records
from tagvault.models.capacity import TagTypeId
from tagvault.models.record import Record


def test_size_is_overhead_plus_payload() -> None:
    assert size_of(Record.url("https://a.io")) == 8 + 12
    assert size_of(Record.text("")) == 8
    assert size_of(Record.opaque(b"\x00\x01\x02")) == 11


def test_size_counts_utf8_bytes_not_characters() -> None:
    assert size_of(Record.text("é")) == 10
    assert size_of(Record.text("🔑")) == 12


def test_empty_set_is_zero() -> None:
    assert size_of_records([]) == 0


def test_additivity() -> None:
    a = [Record.url("https://vault.example"), Record.text("{}")]
    b = [Record.text("reader"), Record.opaque(b"\xff" * 5)]
    assert size_of_records(a + b) == size_of_records(a) + size_of_records(b)
    assert size_of_records(iter(a)) == size_of_records(a)


def test_estimate_usage() -> None:
    records = [Record.text("x" * 92)]  # 100 bytes
    report = estimate_usage(records, TagTypeId.NTAG213)
    assert report.capacity == 144
    assert report.current_usage == 116
    assert report.remaining == 28
    assert report.usage_percentage == 81


def test_estimate_usage_caps_at_full() -> None:
    report = estimate_usage([Record.text("x" * 500)], "NTAG213")
    assert report.remaining == 0
    assert report.usage_percentage == 100


def test_estimate_usage_unknown_type_uses_default() -> None:
    report = estimate_usage([], "unknown")
    assert report.tag_type is TagTypeId.NTAG215
    assert report.current_usage == 16


def test_usage_percentage_rounds_half_up() -> None:
    # 66 + 8 + 16 = 90 bytes of 144 = 62.5%
    report = estimate_usage([Record.text("x" * 66)], TagTypeId.NTAG213)
    assert report.current_usage == 90
    assert report.usage_percentage == 63
