"""Shared application state (injected into routes)."""
import threading
from typing import Optional, Sequence

from tagvault.config import MANUAL_TAG_TYPE, SIMULATE_HARDWARE
from tagvault.core.errors import TagVaultError
from tagvault.core.scan_session import ScanSessionAdapter, SessionHandle
from tagvault.core.transport import NfcpyTransport, SimulatedTransport, Transport
from tagvault.models.record import Record
from tagvault.models.scan import SessionMode, TaggedScanEvent


class AppState:
    def __init__(self, transport: Optional[Transport] = None) -> None:
        self._transport = transport
        self._adapter: Optional[ScanSessionAdapter] = None
        self._lock = threading.Lock()
        self._last_event: Optional[TaggedScanEvent] = None
        self._last_error: Optional[TagVaultError] = None
        self._manual_tag_type = MANUAL_TAG_TYPE

    @property
    def adapter(self) -> ScanSessionAdapter:
        if self._adapter is None:
            if self._transport is None:
                self._transport = SimulatedTransport() if SIMULATE_HARDWARE else NfcpyTransport()
            self._adapter = ScanSessionAdapter(self._transport, manual_tag_type=self._manual_tag_type)
        return self._adapter

    @property
    def manual_tag_type(self) -> Optional[str]:
        return self._manual_tag_type

    @manual_tag_type.setter
    def manual_tag_type(self, value: Optional[str]) -> None:
        self._manual_tag_type = value
        if self._adapter is not None:
            self._adapter.manual_tag_type = value

    @property
    def simulated(self) -> bool:
        return isinstance(self.adapter.transport, SimulatedTransport)

    @property
    def session(self) -> Optional[SessionHandle]:
        return self._adapter.session if self._adapter is not None else None

    def _on_event(self, event: TaggedScanEvent) -> None:
        with self._lock:
            self._last_event = event
            self._last_error = None

    def _on_error(self, error: TagVaultError) -> None:
        with self._lock:
            self._last_error = error

    def start_session(
        self,
        mode: SessionMode,
        records: Optional[Sequence[Record]] = None,
        tag_type: Optional[str] = None,
    ) -> SessionHandle:
        with self._lock:
            self._last_event = None
            self._last_error = None
        return self.adapter.begin_session(
            mode, self._on_event, self._on_error, records=records, tag_type=tag_type
        )

    def stop_session(self) -> None:
        if self._adapter is not None:
            self._adapter.stop_session()

    @property
    def last_event(self) -> Optional[TaggedScanEvent]:
        with self._lock:
            return self._last_event

    @property
    def last_error(self) -> Optional[TagVaultError]:
        with self._lock:
            return self._last_error

    def shutdown(self) -> None:
        self.stop_session()
        if self._transport is not None:
            self._transport.close()


_state = AppState()


def get_state() -> AppState:
    return _state
