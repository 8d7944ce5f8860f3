"""Infer the tag type from the scan serial/UID, with an optional manual override."""
import logging
from typing import Optional, Sequence, Tuple

from tagvault.core.capacity import DEFAULT_TAG_TYPE
from tagvault.models.capacity import TagTypeId

logger = logging.getLogger(__name__)

# Most specific first: "216" must win over "213" when both appear
TYPE_MARKERS: Sequence[Tuple[str, TagTypeId]] = (
    ("216", TagTypeId.NTAG216),
    ("215", TagTypeId.NTAG215),
    ("213", TagTypeId.NTAG213),
)

# NXP 7-byte UIDs: bytes after the 04 manufacturer code
_NXP_PRODUCT_BYTES = {
    "0102": TagTypeId.NTAG216,
    "0103": TagTypeId.NTAG215,
    "0104": TagTypeId.NTAG213,
}

_HEX_DIGITS = frozenset("0123456789abcdef")


def parse_tag_type(value: Optional[str]) -> Optional[TagTypeId]:
    """Parse a user-supplied tag type name ("ntag213", "NTAG213", "mifare_classic"), or None."""
    if not value:
        return None
    try:
        return TagTypeId(value.strip().upper())
    except ValueError:
        return None


def _guess_from_uid(serial: str) -> Optional[TagTypeId]:
    uid = serial.lower().replace(":", "").replace(" ", "")
    if not uid or not set(uid) <= _HEX_DIGITS:
        return None
    if uid.startswith("04") and len(uid) == 14:
        return _NXP_PRODUCT_BYTES.get(uid[2:6])
    if uid.startswith("08"):
        return TagTypeId.MIFARE_CLASSIC
    return None


def resolve(
    serial: Optional[str],
    override: Optional[str] = None,
    markers: Sequence[Tuple[str, TagTypeId]] = TYPE_MARKERS,
) -> TagTypeId:
    """Return the tag type for a scan. Always returns a valid type (default NTAG215)."""
    if override:
        manual = parse_tag_type(override)
        if manual is not None:
            return manual
        logger.warning("Ignoring unknown manual tag type %r", override)
    if not serial:
        return DEFAULT_TAG_TYPE
    for marker, type_id in markers:
        if marker in serial:
            return type_id
    guessed = _guess_from_uid(serial)
    if guessed is not None:
        logger.debug("Tag type %s guessed from UID %s", guessed.value, serial)
        return guessed
    return DEFAULT_TAG_TYPE
