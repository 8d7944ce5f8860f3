"""Core services: capacity lookup, tag type resolution, planning, scan sessions."""
from tagvault.core.errors import CapacityError, TagVaultError, TransportError
from tagvault.core.scan_session import ScanSessionAdapter, SessionHandle
from tagvault.core.write_planner import plan

__all__ = [
    "CapacityError",
    "ScanSessionAdapter",
    "SessionHandle",
    "TagVaultError",
    "TransportError",
    "plan",
]
