"""Reader transports: detect a tap, write a record set atomically."""
import logging
import threading
import time
from collections import deque
from typing import Deque, List, Optional, Protocol, Sequence, Tuple

import ndef

from tagvault.config import NFC_DEVICE
from tagvault.core.errors import TransportError
from tagvault.models.record import Record, RecordKind
from tagvault.models.scan import ScanEvent

logger = logging.getLogger(__name__)


class Transport(Protocol):
    def detect_tag(self, timeout: float) -> Optional[ScanEvent]:
        """Wait up to timeout seconds for a tap; None if no tag was presented."""

    def write_tag(self, records: Sequence[Record]) -> None:
        """Write records to the last detected tag; raise TransportError on failure."""

    def close(self) -> None:
        ...


class SimulatedTransport:
    """For development and tests: taps are queued with present(), writes are recorded."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._taps: Deque[ScanEvent] = deque()
        self._tap_ready = threading.Event()
        self._fail_next: Optional[str] = None
        self.written: List[Tuple[Record, ...]] = []

    def present(self, event: ScanEvent) -> None:
        with self._lock:
            self._taps.append(event)
            self._tap_ready.set()

    def fail_next_write(self, message: str = "Tag was removed during write") -> None:
        with self._lock:
            self._fail_next = message

    def detect_tag(self, timeout: float) -> Optional[ScanEvent]:
        if not self._tap_ready.wait(timeout):
            return None
        with self._lock:
            event = self._taps.popleft() if self._taps else None
            if not self._taps:
                self._tap_ready.clear()
        return event

    def write_tag(self, records: Sequence[Record]) -> None:
        with self._lock:
            if self._fail_next is not None:
                message, self._fail_next = self._fail_next, None
                raise TransportError(message)
            self.written.append(tuple(records))
        logger.info("Simulated write of %d records", len(records))

    def close(self) -> None:
        pass


def _to_ndef(record: Record) -> ndef.Record:
    if record.kind is RecordKind.URL:
        return ndef.UriRecord(record.as_text())
    if record.kind is RecordKind.TEXT:
        return ndef.TextRecord(record.as_text())
    return ndef.Record("application/octet-stream", "", record.payload)


def _from_ndef(ndef_record: ndef.Record) -> Record:
    if isinstance(ndef_record, ndef.UriRecord):
        return Record.url(ndef_record.iri)
    if isinstance(ndef_record, ndef.TextRecord):
        return Record.text(ndef_record.text)
    return Record.opaque(ndef_record.data)


class NfcpyTransport:
    """nfcpy reader (USB or serial PN53x) with ndeflib record conversion."""

    def __init__(self, device: str = NFC_DEVICE, frontend=None) -> None:
        self._device = device
        if frontend is None:
            # Imported here: nfcpy loads libusb at import time
            import nfc

            try:
                frontend = nfc.ContactlessFrontend(device)
            except (IOError, OSError) as e:
                raise TransportError(f"NFC reader {device!r} not available: {e}") from e
        self._clf = frontend
        self._tag = None
        # Identifier of the tag still on the reader; cleared when a poll finds no tag
        self._present_id: Optional[bytes] = None

    def detect_tag(self, timeout: float) -> Optional[ScanEvent]:
        deadline = time.monotonic() + timeout
        try:
            tag = self._clf.connect(
                rdwr={"on-connect": lambda tag: False},
                terminate=lambda: time.monotonic() > deadline,
            )
        except (IOError, OSError) as e:
            raise TransportError(f"NFC read failed: {e}") from e
        if not tag:
            self._present_id = None
            return None
        self._tag = tag
        if tag.identifier == self._present_id:
            # Same tap: connect returns a resting tag immediately, so wait out the poll
            time.sleep(max(0.0, deadline - time.monotonic()))
            return None
        self._present_id = tag.identifier
        records: Tuple[Record, ...] = ()
        if tag.ndef is not None:
            records = tuple(_from_ndef(r) for r in tag.ndef.records)
        return ScanEvent(serial_number=tag.identifier.hex(), records=records)

    def write_tag(self, records: Sequence[Record]) -> None:
        import nfc

        tag = self._tag
        if tag is None:
            raise TransportError("No tag detected")
        if tag.ndef is None or not tag.ndef.is_writeable:
            raise TransportError(f"Tag {tag.identifier.hex()} is not NDEF writeable")
        try:
            tag.ndef.records = [_to_ndef(r) for r in records]
        except (nfc.tag.TagCommandError, IOError, OSError) as e:
            raise TransportError(f"Error writing to NFC tag: {e}") from e

    def close(self) -> None:
        self._tag = None
        self._clf.close()
