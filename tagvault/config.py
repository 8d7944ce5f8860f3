"""Configuration: env, API host/port, tag capacity constants, NFC device."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Base paths (project root = parent of tagvault package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so TAGVAULT_* overrides are set
load_dotenv(BASE_DIR / ".env")

# API
API_HOST = os.getenv("TAGVAULT_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("TAGVAULT_API_PORT", "8000"))

# Tag capacity
# Reserved for TLV/header structures that are not counted per record
SAFETY_MARGIN = 40
# NDEF record header cost charged to every record
RECORD_OVERHEAD = 8
# NDEF message overhead used by the memory report
MESSAGE_OVERHEAD = 16
# Service URL, metadata, owner
MANDATORY_RECORD_COUNT = 3

# Manual tag type override (e.g. "ntag213"); empty = auto-detect from serial
MANUAL_TAG_TYPE = os.getenv("TAGVAULT_TAG_TYPE", "").strip() or None

# NFC reader (nfcpy device path, e.g. "usb" or "tty:AMA0:pn532")
NFC_DEVICE = os.getenv("TAGVAULT_NFC_DEVICE", "usb")
# How long one detect call waits for a tap before the session re-checks for stop
POLL_TIMEOUT_SEC = float(os.getenv("TAGVAULT_POLL_TIMEOUT", "0.5"))

# Hardware simulation (for development without a reader)
SIMULATE_HARDWARE = os.getenv("TAGVAULT_SIMULATE_HARDWARE", "0").lower() in ("1", "true", "yes")
