"""Scan session: enrich taps with tag capacity, and write record sets that fit."""
import logging
import threading
from dataclasses import replace
from typing import Callable, Mapping, Optional, Sequence

from tagvault.config import MANUAL_TAG_TYPE, POLL_TIMEOUT_SEC
from tagvault.core.capacity import PROFILES, effective_budget, profile_for
from tagvault.core.errors import CapacityError, TagVaultError, TransportError
from tagvault.core.size_estimator import size_of_records
from tagvault.core.tag_resolver import resolve
from tagvault.core.transport import Transport
from tagvault.core.write_planner import plan
from tagvault.models.capacity import CapacityProfile, TagTypeId
from tagvault.models.plan import WritePlan, WriteResult
from tagvault.models.record import Record
from tagvault.models.scan import ScanEvent, SessionMode, TaggedScanEvent

logger = logging.getLogger(__name__)

EventCallback = Callable[[TaggedScanEvent], None]
ErrorCallback = Callable[[TagVaultError], None]


class SessionHandle:
    """Handle to a running scan session. stop() is idempotent."""

    def __init__(self, mode: SessionMode, tag_type: Optional[str] = None) -> None:
        self.mode = mode
        self.tag_type = tag_type
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def active(self) -> bool:
        return not self._stop.is_set() and self._thread is not None and self._thread.is_alive()

    @property
    def stopping(self) -> bool:
        return self._stop.is_set()

    def stop(self, timeout: float = 2.0) -> None:
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the session ends; True if it ended within timeout."""
        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout=timeout)
        return not thread.is_alive()


class ScanSessionAdapter:
    """Wraps a transport; one active session at a time."""

    def __init__(
        self,
        transport: Transport,
        poll_timeout: float = POLL_TIMEOUT_SEC,
        manual_tag_type: Optional[str] = MANUAL_TAG_TYPE,
        profiles: Mapping[TagTypeId, CapacityProfile] = PROFILES,
        stop_timeout: float = 2.0,
    ) -> None:
        self._transport = transport
        self._poll_timeout = poll_timeout
        self._profiles = profiles
        self._stop_timeout = stop_timeout
        self._lock = threading.Lock()
        self._session: Optional[SessionHandle] = None
        self.manual_tag_type = manual_tag_type

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def session(self) -> Optional[SessionHandle]:
        with self._lock:
            return self._session

    def tag_event(self, event: ScanEvent, override: Optional[str] = None) -> TaggedScanEvent:
        """Attach resolved tag type and effective budget to a raw scan event.

        override (a per-session tag type) wins over the adapter's manual tag type.
        """
        tag_type = resolve(event.serial_number, override=override or self.manual_tag_type)
        budget = effective_budget(profile_for(tag_type, self._profiles))
        logger.info("Detected tag type: %s (budget %d bytes)", tag_type.value, budget)
        return TaggedScanEvent(event=event, tag_type=tag_type, effective_budget=budget)

    def write_records(self, records: Sequence[Record], tagged: TaggedScanEvent) -> WriteResult:
        """Write records to the tag in tagged, dropping optional records if they do not fit.

        Raises CapacityError before touching the tag if the mandatory records alone
        are too large; transport failures propagate as TransportError.
        """
        budget = tagged.effective_budget
        total = size_of_records(records)
        logger.info("Total data size: %d bytes, max size for %s: %d bytes", total, tagged.tag_type.value, budget)
        if total <= budget:
            write_plan = WritePlan(included=tuple(records), excluded=(), total_encoded_size=total)
        else:
            logger.info("Data exceeds tag capacity, dropping optional records")
            write_plan = plan(records, budget)
        self._transport.write_tag(write_plan.included)
        return WriteResult(plan=write_plan, tag_type=tagged.tag_type, effective_budget=budget)

    def begin_session(
        self,
        mode: SessionMode,
        on_event: EventCallback,
        on_error: ErrorCallback,
        records: Optional[Sequence[Record]] = None,
        tag_type: Optional[str] = None,
    ) -> SessionHandle:
        """Start polling for taps, stopping any active session first.

        READ sessions forward every tap to on_event until stopped. WRITE sessions
        write records on the first tap, report the result through on_event (the
        event's write_result), and end. tag_type fixes the tag type for this
        session instead of resolving it from each tap.
        """
        if mode is SessionMode.WRITE and records is None:
            raise ValueError("Write session needs records")
        handle = SessionHandle(mode, tag_type=tag_type)
        handle._thread = threading.Thread(
            target=self._run,
            args=(handle, on_event, on_error, tuple(records or ())),
            daemon=True,
        )
        with self._lock:
            previous, self._session = self._session, handle
        if previous is not None:
            previous.stop(timeout=self._stop_timeout)
        handle._thread.start()
        logger.info("NFC %s session started", mode.value)
        return handle

    def stop_session(self) -> None:
        with self._lock:
            session, self._session = self._session, None
        if session is not None:
            session.stop(timeout=self._stop_timeout)
            logger.info("NFC %s session stopped", session.mode.value)

    def _is_current(self, handle: SessionHandle) -> bool:
        with self._lock:
            return self._session is handle and not handle.stopping

    def _deliver(self, handle: SessionHandle, callback: Callable, value) -> None:
        # A replaced or stopped session must not report into its successor's state
        if self._is_current(handle):
            callback(value)
        else:
            logger.info("Dropping result of stopped NFC %s session", handle.mode.value)

    def _run(
        self,
        handle: SessionHandle,
        on_event: EventCallback,
        on_error: ErrorCallback,
        records: Sequence[Record],
    ) -> None:
        try:
            while not handle.stopping:
                try:
                    event = self._transport.detect_tag(self._poll_timeout)
                except TransportError as e:
                    logger.warning("NFC error: %s", e)
                    self._deliver(handle, on_error, e)
                    return
                if event is None or handle.stopping:
                    continue
                tagged = self.tag_event(event, override=handle.tag_type)
                if handle.mode is SessionMode.READ:
                    self._deliver(handle, on_event, tagged)
                    continue
                try:
                    result = self.write_records(records, tagged)
                except (CapacityError, TransportError) as e:
                    logger.warning("Write failed: %s", e)
                    self._deliver(handle, on_error, e)
                    return
                self._deliver(handle, on_event, replace(tagged, write_result=result))
                return
        except Exception:
            logger.exception("NFC %s session callback failed", handle.mode.value)
        finally:
            handle._stop.set()
