"""Shared fixtures: sized records, simulated transport, session adapter."""
import pytest

from tagvault.config import RECORD_OVERHEAD
from tagvault.core.scan_session import ScanSessionAdapter
from tagvault.core.transport import SimulatedTransport
from tagvault.models.record import Record


def sized(size: int, fill: str = "x") -> Record:
    """Text record whose encoded size is exactly size bytes."""
    return Record.text(fill * (size - RECORD_OVERHEAD))


@pytest.fixture
def transport() -> SimulatedTransport:
    return SimulatedTransport()


@pytest.fixture
def adapter(transport: SimulatedTransport):
    adapter = ScanSessionAdapter(transport, poll_timeout=0.01, manual_tag_type=None)
    yield adapter
    adapter.stop_session()
