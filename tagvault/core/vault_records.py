"""Vault tag layout: service URL, metadata, owner, then one record per reader."""
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from tagvault.models.plan import WritePlan
from tagvault.models.record import Record, RecordKind

logger = logging.getLogger(__name__)


@dataclass
class VaultTagData:
    service_url: str
    metadata: Dict[str, Any]
    owner: Dict[str, Any]
    readers: List[Dict[str, Any]] = field(default_factory=list)


def _json_record(data: Dict[str, Any]) -> Record:
    return Record.text(json.dumps(data, separators=(",", ":")))


def build_records(data: VaultTagData) -> List[Record]:
    """Records in write order; the first three are mandatory."""
    records = [
        Record.url(data.service_url),
        _json_record(data.metadata),
        _json_record(data.owner),
    ]
    records.extend(_json_record(reader) for reader in data.readers)
    return records


def _decode_json(record: Record) -> Optional[Any]:
    try:
        return json.loads(record.as_text())
    except (UnicodeDecodeError, json.JSONDecodeError):
        logger.debug("Skipping non-JSON text record")
        return None


def parse_records(records: Sequence[Record]) -> Optional[VaultTagData]:
    """Parse a vault tag; None if URL, metadata or owner is missing."""
    if len(records) < 3:
        return None
    service_url = next((r.as_text() for r in records if r.kind is RecordKind.URL), None)
    metadata = None
    owner = None
    readers = []
    for record in records:
        if record.kind is not RecordKind.TEXT:
            continue
        data = _decode_json(record)
        if not isinstance(data, dict):
            continue
        if "version" in data and "iv" in data:
            metadata = data
        elif data.get("t") == "o":
            owner = data
        elif data.get("t") == "r":
            readers.append(data)
    if service_url is None or metadata is None or owner is None:
        return None
    return VaultTagData(service_url=service_url, metadata=metadata, owner=owner, readers=readers)


def excluded_readers(write_plan: WritePlan) -> List[Dict[str, Any]]:
    """Reader entries dropped from a plan, for telling the user who was left off the tag."""
    out = []
    for record in write_plan.excluded:
        if record.kind is not RecordKind.TEXT:
            continue
        data = _decode_json(record)
        if isinstance(data, dict):
            out.append(data)
    return out
