from pathlib import Path

import fitz
import pytest

from shortlist.candidates import IncomingFile, PDF_MEDIA_TYPE, Status
from shortlist.state import Session


def make_pdf(path: Path, *pages: str) -> Path:
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        page.insert_text((72, 72), text, fontsize=11)
    doc.save(str(path))
    doc.close()
    return path


def pdf_file(tmp_path: Path, name: str) -> IncomingFile:
    return IncomingFile(name=name, media_type=PDF_MEDIA_TYPE, path=tmp_path / name)


@pytest.fixture
def make_session(tmp_path):
    def _make(*statuses: Status, focus: int = -1) -> Session:
        session = Session()
        session.ingest(pdf_file(tmp_path, f"c{i}.pdf") for i in range(len(statuses)))
        for c, st in zip(session.candidates, statuses):
            c.status = st
        session.current_index = focus
        return session
    return _make
