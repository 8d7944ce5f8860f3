"""Tests for the capacity profile table."""
import pytest

from tagvault.core.capacity import DEFAULT_PROFILE, PROFILES, effective_budget, profile_for
from tagvault.models.capacity import CapacityProfile, TagTypeId


def test_table_values() -> None:
    assert profile_for(TagTypeId.NTAG213).usable_bytes == 144
    assert profile_for(TagTypeId.NTAG215).usable_bytes == 504
    assert profile_for(TagTypeId.NTAG216).usable_bytes == 888
    assert profile_for(TagTypeId.MIFARE_CLASSIC).usable_bytes == 716


def test_unknown_type_gets_default_profile() -> None:
    assert profile_for("NTAG999") is DEFAULT_PROFILE
    assert profile_for(None) is DEFAULT_PROFILE
    assert DEFAULT_PROFILE.name is TagTypeId.NTAG215


def test_lookup_accepts_plain_string_value() -> None:
    assert profile_for("NTAG216").name is TagTypeId.NTAG216


def test_effective_budget_subtracts_safety_margin() -> None:
    assert effective_budget(profile_for(TagTypeId.NTAG215)) == 464
    assert effective_budget(profile_for(TagTypeId.NTAG213)) == 104
    assert effective_budget(profile_for(TagTypeId.NTAG216)) == 848


def test_effective_budget_never_negative() -> None:
    tiny = CapacityProfile(TagTypeId.NTAG213, 10)
    assert effective_budget(tiny) == 0
    assert effective_budget(tiny, safety_margin=4) == 6


def test_profiles_are_positive_and_read_only() -> None:
    assert all(p.usable_bytes > 0 for p in PROFILES.values())
    with pytest.raises(TypeError):
        PROFILES[TagTypeId.NTAG213] = CapacityProfile(TagTypeId.NTAG213, 1)  # type: ignore[index]


def test_profile_rejects_non_positive_capacity() -> None:
    with pytest.raises(ValueError):
        CapacityProfile(TagTypeId.NTAG213, 0)
