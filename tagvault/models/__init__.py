"""Data models for tag capacity, records, write plans, and scan events."""
from tagvault.models.capacity import CapacityProfile, TagMemoryReport, TagTypeId
from tagvault.models.plan import WritePlan, WriteResult
from tagvault.models.record import Record, RecordKind
from tagvault.models.scan import ScanEvent, SessionMode, TaggedScanEvent

__all__ = [
    "CapacityProfile",
    "Record",
    "RecordKind",
    "ScanEvent",
    "SessionMode",
    "TagMemoryReport",
    "TagTypeId",
    "TaggedScanEvent",
    "WritePlan",
    "WriteResult",
]
