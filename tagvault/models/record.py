"""NDEF-style records written to a tag."""
from dataclasses import dataclass
from enum import Enum


class RecordKind(str, Enum):
    URL = "url"
    TEXT = "text"
    OPAQUE = "opaque"


@dataclass(frozen=True)
class Record:
    """One record: kind plus payload bytes (UTF-8 for url/text)."""
    kind: RecordKind
    payload: bytes

    @classmethod
    def url(cls, url: str) -> "Record":
        return cls(RecordKind.URL, url.encode("utf-8"))

    @classmethod
    def text(cls, text: str) -> "Record":
        return cls(RecordKind.TEXT, text.encode("utf-8"))

    @classmethod
    def opaque(cls, data: bytes) -> "Record":
        return cls(RecordKind.OPAQUE, bytes(data))

    def as_text(self) -> str:
        """Decode url/text payloads; opaque records have no text form."""
        if self.kind is RecordKind.OPAQUE:
            raise ValueError("opaque records have no text form")
        return self.payload.decode("utf-8")
