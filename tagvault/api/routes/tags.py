"""Tag capacity endpoints: profiles, type resolution, plan preview, memory report."""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from tagvault.api.state import AppState, get_state
from tagvault.core.capacity import PROFILES, effective_budget, profile_for
from tagvault.core.errors import CapacityError
from tagvault.core.size_estimator import estimate_usage, size_of
from tagvault.core.tag_resolver import parse_tag_type, resolve
from tagvault.core.vault_records import VaultTagData, build_records, excluded_readers
from tagvault.core.write_planner import plan
from tagvault.models.capacity import TagTypeId
from tagvault.models.record import Record, RecordKind

router = APIRouter()


class RecordBody(BaseModel):
    kind: RecordKind
    data: str  # text for url/text, hex for opaque


class RecordsBody(BaseModel):
    records: List[RecordBody]
    tag_type: Optional[str] = None
    serial: Optional[str] = None


class TagTypeBody(BaseModel):
    tag_type: Optional[str] = None


class VaultBody(BaseModel):
    service_url: str
    metadata: Dict[str, Any]
    owner: Dict[str, Any]
    readers: List[Dict[str, Any]] = []
    tag_type: Optional[str] = None


def vault_from_body(body: VaultBody) -> VaultTagData:
    return VaultTagData(
        service_url=body.service_url,
        metadata=body.metadata,
        owner=body.owner,
        readers=list(body.readers),
    )


def checked_tag_type(value: Optional[str]) -> Optional[TagTypeId]:
    """Parse a requested tag type; 400 if it names no known type."""
    if not value:
        return None
    tag_type = parse_tag_type(value)
    if tag_type is None:
        raise HTTPException(status_code=400, detail=f"Unknown tag type: {value}")
    return tag_type


def records_from_body(body: RecordsBody) -> List[Record]:
    out = []
    for r in body.records:
        if r.kind is RecordKind.URL:
            out.append(Record.url(r.data))
        elif r.kind is RecordKind.TEXT:
            out.append(Record.text(r.data))
        else:
            try:
                out.append(Record.opaque(bytes.fromhex(r.data)))
            except ValueError:
                raise HTTPException(status_code=400, detail="Opaque record data must be hex")
    return out


def record_to_dict(r: Record) -> dict:
    data = r.payload.hex() if r.kind is RecordKind.OPAQUE else r.as_text()
    return {"kind": r.kind.value, "data": data, "size": size_of(r)}


def capacity_error_to_http(e: CapacityError) -> HTTPException:
    return HTTPException(
        status_code=413,
        detail={
            "message": str(e),
            "mandatory_size": e.mandatory_size,
            "budget": e.budget,
            "shortfall": e.shortfall,
        },
    )


def body_tag_type(body: RecordsBody, state: AppState) -> TagTypeId:
    checked_tag_type(body.tag_type)
    return resolve(body.serial, override=body.tag_type or state.manual_tag_type)


@router.get("/profiles")
def list_profiles():
    """Capacity table with effective write budgets."""
    return [
        {
            "tag_type": p.name.value,
            "usable_bytes": p.usable_bytes,
            "effective_budget": effective_budget(p),
        }
        for p in PROFILES.values()
    ]


@router.get("/resolve")
def resolve_tag_type(serial: Optional[str] = None, state: AppState = Depends(get_state)):
    """Tag type and budget the writer would use for this serial."""
    tag_type = resolve(serial, override=state.manual_tag_type)
    return {
        "serial": serial,
        "tag_type": tag_type.value,
        "effective_budget": effective_budget(profile_for(tag_type)),
        "manual": bool(state.manual_tag_type),
    }


def _plan_response(records: List[Record], tag_type: TagTypeId) -> dict:
    budget = effective_budget(profile_for(tag_type))
    try:
        write_plan = plan(records, budget)
    except CapacityError as e:
        raise capacity_error_to_http(e)
    return {
        "tag_type": tag_type.value,
        "effective_budget": budget,
        "total_encoded_size": write_plan.total_encoded_size,
        "included": [record_to_dict(r) for r in write_plan.included],
        "excluded": [record_to_dict(r) for r in write_plan.excluded],
        "excluded_readers": excluded_readers(write_plan),
    }


@router.post("/plan")
def preview_plan(body: RecordsBody, state: AppState = Depends(get_state)):
    """Which records would be written and which dropped, without touching a tag."""
    return _plan_response(records_from_body(body), body_tag_type(body, state))


@router.post("/vault/plan")
def preview_vault_plan(body: VaultBody, state: AppState = Depends(get_state)):
    """Plan a vault tag; excluded_readers lists the readers that would be left off."""
    tag_type = checked_tag_type(body.tag_type)
    if tag_type is None:
        tag_type = resolve(None, override=state.manual_tag_type)
    return _plan_response(build_records(vault_from_body(body)), tag_type)


@router.post("/usage")
def memory_usage(body: RecordsBody, state: AppState = Depends(get_state)):
    """Estimated tag memory use of the records."""
    report = estimate_usage(records_from_body(body), body_tag_type(body, state))
    return {
        "tag_type": report.tag_type.value,
        "capacity": report.capacity,
        "current_usage": report.current_usage,
        "remaining": report.remaining,
        "usage_percentage": report.usage_percentage,
        "manual": bool(body.tag_type or state.manual_tag_type),
    }


@router.put("/tag-type")
def set_manual_tag_type(body: TagTypeBody, state: AppState = Depends(get_state)):
    """Set the manual tag type override, or clear it with null."""
    tag_type = checked_tag_type(body.tag_type)
    state.manual_tag_type = tag_type.value if tag_type else None
    return {"tag_type": state.manual_tag_type}
