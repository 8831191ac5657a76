from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..core.errors import NotFound

# Lossless decoding so that text equality is byte equality.
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


@dataclass(frozen=True)
class Document:
    path: Path
    data: bytes

    @property
    def text(self) -> str:
        return self.data.decode(_ENCODING, _ERRORS)

    @property
    def lines(self) -> list[str]:
        return self.text.splitlines(keepends=True)


def encode_text(text: str) -> bytes:
    return text.encode(_ENCODING, _ERRORS)


def read_document(path: Path) -> Document:
    if not path.is_file():
        raise NotFound(f"document not found: {path}")
    return Document(path=path, data=path.read_bytes())
