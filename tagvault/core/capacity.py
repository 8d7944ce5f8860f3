"""Capacity profile table: tag type -> usable bytes, and the effective write budget."""
from types import MappingProxyType
from typing import Mapping, Union

from tagvault.config import SAFETY_MARGIN
from tagvault.models.capacity import CapacityProfile, TagTypeId

DEFAULT_TAG_TYPE = TagTypeId.NTAG215

PROFILES: Mapping[TagTypeId, CapacityProfile] = MappingProxyType(
    {
        TagTypeId.NTAG213: CapacityProfile(TagTypeId.NTAG213, 144),
        TagTypeId.NTAG215: CapacityProfile(TagTypeId.NTAG215, 504),
        TagTypeId.NTAG216: CapacityProfile(TagTypeId.NTAG216, 888),
        TagTypeId.MIFARE_ULTRALIGHT: CapacityProfile(TagTypeId.MIFARE_ULTRALIGHT, 144),
        TagTypeId.MIFARE_CLASSIC: CapacityProfile(TagTypeId.MIFARE_CLASSIC, 716),
    }
)

DEFAULT_PROFILE = PROFILES[DEFAULT_TAG_TYPE]


def profile_for(
    type_id: Union[TagTypeId, str, None],
    profiles: Mapping[TagTypeId, CapacityProfile] = PROFILES,
) -> CapacityProfile:
    """Return the profile for type_id, or the default profile if unknown."""
    try:
        key = TagTypeId(type_id)
    except ValueError:
        return profiles.get(DEFAULT_TAG_TYPE, DEFAULT_PROFILE)
    return profiles.get(key) or profiles.get(DEFAULT_TAG_TYPE, DEFAULT_PROFILE)


def effective_budget(profile: CapacityProfile, safety_margin: int = SAFETY_MARGIN) -> int:
    """Usable bytes minus the reserved safety margin, never below zero."""
    return max(0, profile.usable_bytes - safety_margin)
