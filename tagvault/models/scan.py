"""Scan events from the transport and their capacity-enriched form."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from tagvault.models.capacity import TagTypeId
from tagvault.models.plan import WriteResult
from tagvault.models.record import Record


class SessionMode(str, Enum):
    READ = "read"
    WRITE = "write"


@dataclass(frozen=True)
class ScanEvent:
    """One physical tap: optional serial/UID string and the records read from the tag."""
    serial_number: Optional[str] = None
    records: Tuple[Record, ...] = ()


@dataclass(frozen=True)
class TaggedScanEvent:
    """Scan event with resolved tag type and effective write budget."""
    event: ScanEvent
    tag_type: TagTypeId
    effective_budget: int
    write_result: Optional[WriteResult] = None

    @property
    def serial_number(self) -> Optional[str]:
        return self.event.serial_number

    @property
    def records(self) -> Tuple[Record, ...]:
        return self.event.records
