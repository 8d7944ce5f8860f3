"""Encoded size of records and record sets, and the tag memory report."""
from typing import Iterable, Mapping, Union

from tagvault.config import MESSAGE_OVERHEAD, RECORD_OVERHEAD
from tagvault.core.capacity import PROFILES, profile_for
from tagvault.models.capacity import CapacityProfile, TagMemoryReport, TagTypeId
from tagvault.models.record import Record


def size_of(record: Record) -> int:
    """Framing overhead plus payload length. Exact, so sizes add up across record sets."""
    return RECORD_OVERHEAD + len(record.payload)


def size_of_records(records: Iterable[Record]) -> int:
    return sum(size_of(r) for r in records)


def estimate_usage(
    records: Iterable[Record],
    tag_type: Union[TagTypeId, str, None],
    profiles: Mapping[TagTypeId, CapacityProfile] = PROFILES,
) -> TagMemoryReport:
    """How much of the tag the records would use, including NDEF message overhead."""
    profile = profile_for(tag_type, profiles)
    capacity = profile.usable_bytes
    usage = size_of_records(records) + MESSAGE_OVERHEAD
    return TagMemoryReport(
        tag_type=profile.name,
        capacity=capacity,
        current_usage=usage,
        remaining=max(0, capacity - usage),
        # Half-up, so 62.5% reports as 63
        usage_percentage=min(100, (usage * 200 + capacity) // (2 * capacity)),
    )
