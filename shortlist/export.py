from __future__ import annotations
import io
import logging
import zipfile
from pathlib import Path
from typing import Iterable, Optional, Tuple

from .state import Session

logger = logging.getLogger("shortlist.export")


class ExportError(RuntimeError):
    pass


def build_archive(named_blobs: Iterable[Tuple[str, bytes]]) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, data in named_blobs:
            zf.writestr(name, data)
    return buf.getvalue()


def export_kept(session: Session, out_dir: str, archive_name: str, folder: str) -> Optional[Path]:
    """Write the kept PDFs to out_dir/archive_name. Returns None when nothing is kept.

    Candidate statuses are never touched, so a failed export can simply be retried.
    """
    kept = session.kept()
    if not kept:
        logger.info("Nothing kept; no archive written")
        return None
    out_path = Path(out_dir) / archive_name
    try:
        blobs = [(f"{folder}/{c.source.name}", c.source.path.read_bytes()) for c in kept]
        data = build_archive(blobs)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_bytes(data)
    except (OSError, zipfile.BadZipFile, ValueError) as e:
        logger.exception("Export failed")
        raise ExportError(f"Error creating ZIP: {e}") from e
    logger.info("Exported %d kept candidate(s) to %s", len(kept), out_path)
    return out_path
