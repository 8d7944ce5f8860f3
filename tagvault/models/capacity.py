"""Tag types and their usable capacity."""
from dataclasses import dataclass
from enum import Enum


class TagTypeId(str, Enum):
    NTAG213 = "NTAG213"
    NTAG215 = "NTAG215"
    NTAG216 = "NTAG216"
    MIFARE_ULTRALIGHT = "MIFARE_ULTRALIGHT"
    MIFARE_CLASSIC = "MIFARE_CLASSIC"


@dataclass(frozen=True)
class CapacityProfile:
    """Usable user memory of one tag type, in bytes."""
    name: TagTypeId
    usable_bytes: int

    def __post_init__(self) -> None:
        if self.usable_bytes <= 0:
            raise ValueError(f"usable_bytes must be positive, got {self.usable_bytes} for {self.name}")


@dataclass(frozen=True)
class TagMemoryReport:
    """Estimated memory use of a record set on a given tag type."""
    tag_type: TagTypeId
    capacity: int
    current_usage: int
    remaining: int
    usage_percentage: int
