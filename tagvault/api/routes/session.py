"""Scan session endpoints: start read/write sessions, poll the result, simulate taps."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from tagvault.api.routes.tags import (
    RecordBody,
    RecordsBody,
    VaultBody,
    checked_tag_type,
    record_to_dict,
    records_from_body,
    vault_from_body,
)
from tagvault.api.state import AppState, get_state
from tagvault.core.errors import CapacityError, TransportError
from tagvault.core.vault_records import build_records, excluded_readers, parse_records
from tagvault.models.scan import ScanEvent, SessionMode, TaggedScanEvent

router = APIRouter()


class SimulateBody(BaseModel):
    serial: Optional[str] = None
    records: List[RecordBody] = []


def _event_to_dict(event: TaggedScanEvent) -> dict:
    out = {
        "serial": event.serial_number,
        "tag_type": event.tag_type.value,
        "effective_budget": event.effective_budget,
        "records": [record_to_dict(r) for r in event.records],
        "vault": None,
        "write": None,
    }
    vault = parse_records(event.records)
    if vault is not None:
        out["vault"] = {"service_url": vault.service_url, "readers": len(vault.readers)}
    result = event.write_result
    if result is not None:
        out["write"] = {
            "total_encoded_size": result.plan.total_encoded_size,
            "written": len(result.plan.included),
            "excluded": [record_to_dict(r) for r in result.excluded],
            "excluded_readers": excluded_readers(result.plan),
        }
    return out


def _error_to_dict(error) -> Optional[dict]:
    if error is None:
        return None
    out = {"type": type(error).__name__, "message": str(error)}
    if isinstance(error, CapacityError):
        out.update(mandatory_size=error.mandatory_size, budget=error.budget, shortfall=error.shortfall)
    return out


def _start(state: AppState, mode: SessionMode, records=None, tag_type: Optional[str] = None) -> dict:
    try:
        state.start_session(mode, records=records, tag_type=tag_type)
    except TransportError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return {"ok": True, "mode": mode.value}


@router.post("/session/read")
def start_read_session(state: AppState = Depends(get_state)):
    """Start reading taps; each tap replaces the last event."""
    return _start(state, SessionMode.READ)


@router.post("/session/write")
def start_write_session(body: RecordsBody, state: AppState = Depends(get_state)):
    """Write the records on the next tap, dropping readers that do not fit.

    tag_type fixes the tag type for this write; the serial always comes from the tap.
    """
    if body.serial is not None:
        raise HTTPException(status_code=400, detail="serial is read from the tapped tag")
    tag_type = checked_tag_type(body.tag_type)
    return _start(
        state,
        SessionMode.WRITE,
        records_from_body(body),
        tag_type=tag_type.value if tag_type else None,
    )


@router.post("/session/write/vault")
def start_vault_write_session(body: VaultBody, state: AppState = Depends(get_state)):
    """Write a vault tag (service URL, metadata, owner, readers) on the next tap."""
    tag_type = checked_tag_type(body.tag_type)
    return _start(
        state,
        SessionMode.WRITE,
        build_records(vault_from_body(body)),
        tag_type=tag_type.value if tag_type else None,
    )


@router.delete("/session")
def stop_session(state: AppState = Depends(get_state)):
    state.stop_session()
    return {"ok": True}


@router.get("/session")
def get_session(state: AppState = Depends(get_state)):
    """Current session status with the last tagged event and error."""
    session = state.session
    event = state.last_event
    return {
        "active": bool(session and session.active),
        "mode": session.mode.value if session else None,
        "event": _event_to_dict(event) if event else None,
        "error": _error_to_dict(state.last_error),
    }


@router.post("/simulate")
def simulate_tap(body: SimulateBody, state: AppState = Depends(get_state)):
    """For development: present a tag when hardware is simulated."""
    try:
        simulated = state.simulated
    except TransportError as e:
        raise HTTPException(status_code=503, detail=str(e))
    if not simulated:
        raise HTTPException(status_code=400, detail="Hardware is not simulated")
    transport = state.adapter.transport
    records = records_from_body(RecordsBody(records=body.records))
    transport.present(ScanEvent(serial_number=body.serial, records=tuple(records)))
    return {"ok": True, "serial": body.serial}
