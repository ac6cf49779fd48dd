from __future__ import annotations
import mimetypes
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from .regions import Region

PDF_MEDIA_TYPE = "application/pdf"
_EXT_RX = re.compile(r"\.[^/.]+$")


class Status(str, Enum):
    PENDING = "pending"
    KEPT = "kept"
    REJECTED = "rejected"


def candidate_id(name: str) -> str:
    """File name with its final extension removed."""
    return _EXT_RX.sub("", name)


@dataclass(frozen=True)
class IncomingFile:
    name: str               # base name, e.g. "12345.pdf"
    media_type: str         # declared media type
    path: Path

    @classmethod
    def from_path(cls, path) -> "IncomingFile":
        p = Path(path)
        media_type, _ = mimetypes.guess_type(p.name)
        return cls(name=p.name, media_type=media_type or "application/octet-stream", path=p)


@dataclass
class Candidate:
    id: str
    source: IncomingFile
    status: Status = Status.PENDING
    extracted_text: Optional[str] = None
    region: Optional[Region] = None

    @property
    def is_indexed(self) -> bool:
        return self.extracted_text is not None

    def set_extraction(self, text: str, region: Region) -> None:
        # text and region are written together, once
        if self.is_indexed:
            raise RuntimeError(f"Candidate {self.id} already indexed")
        self.region = region
        self.extracted_text = " ".join(text.split()).lower() if text else ""


@dataclass(frozen=True)
class HistoryEntry:
    index: int
    previous_status: Status
