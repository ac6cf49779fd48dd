# shortlist/preview.py
from __future__ import annotations
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import fitz  # PyMuPDF
import pdfplumber
from PIL import Image, ImageDraw

from .candidates import Candidate
from .matching import has_hit

logger = logging.getLogger("shortlist.preview")

HIGHLIGHT_RGBA = (255, 230, 0, 110)
LOAD_ERROR = "Error loading PDF."


@dataclass
class TextSpan:
    text: str
    bbox: Tuple[float, float, float, float]  # x0,y0,x1,y1 in raster pixels
    highlighted: bool = False


@dataclass
class PageRender:
    page: int               # 0-based
    png: bytes
    width: int
    height: int
    spans: List[TextSpan] = field(default_factory=list)

    @property
    def highlighted(self) -> int:
        return sum(1 for s in self.spans if s.highlighted)


@dataclass
class DetailView:
    id: str
    pages: List[str] = field(default_factory=list)   # paths relative to the report dir
    highlights: int = 0
    error: Optional[str] = None


def _spans(pdf_path: str, page_index: int, scale: float, terms: Sequence[str]) -> List[TextSpan]:
    out: List[TextSpan] = []
    with pdfplumber.open(pdf_path) as pdf:
        for w in pdf.pages[page_index].extract_words():
            # pdfplumber coordinates can be Decimals; cast to float
            x0, y0, x1, y1 = (float(w[k]) * scale for k in ("x0", "top", "x1", "bottom"))
            out.append(TextSpan(text=w["text"], bbox=(x0, y0, x1, y1), highlighted=has_hit(w["text"], terms)))
    return out


def _paint(png: bytes, spans: Sequence[TextSpan]) -> bytes:
    img = Image.open(io.BytesIO(png)).convert("RGBA")
    overlay = Image.new("RGBA", img.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    for s in spans:
        if s.highlighted:
            draw.rectangle(s.bbox, fill=HIGHLIGHT_RGBA)
    buf = io.BytesIO()
    Image.alpha_composite(img, overlay).convert("RGB").save(buf, format="PNG")
    return buf.getvalue()


def render_page(pdf_path: str, page_index: int, scale: float, terms: Sequence[str] = ()) -> PageRender:
    """Rasterize one page and attach its positioned words, painting keyword hits."""
    with fitz.open(pdf_path) as doc:
        pix = doc[page_index].get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
        png = pix.tobytes("png")
        width, height = pix.width, pix.height
    spans = _spans(pdf_path, page_index, scale, terms)
    if terms and any(s.highlighted for s in spans):
        png = _paint(png, spans)
    return PageRender(page=page_index, png=png, width=width, height=height, spans=spans)


def render_detail(candidate: Candidate, out_dir: str, width: int, terms: Sequence[str] = ()) -> DetailView:
    """
    Render every page of a candidate to out_dir/pages/<id>-p<n>.png.
    Failures come back as an inline error; nothing is raised.
    """
    view = DetailView(id=candidate.id)
    try:
        pdf_path = str(candidate.source.path)
        pages_dir = Path(out_dir) / "pages"
        pages_dir.mkdir(parents=True, exist_ok=True)
        with fitz.open(pdf_path) as doc:
            page_widths = [p.rect.width for p in doc]
        rel_paths = []
        for pno, page_width in enumerate(page_widths):
            r = render_page(pdf_path, pno, width / page_width, terms)
            op = pages_dir / f"{candidate.id}-p{pno + 1}.png"
            op.write_bytes(r.png)
            view.highlights += r.highlighted
            rel_paths.append((Path("pages") / op.name).as_posix())
        view.pages = rel_paths
    except Exception:
        logger.exception("Rendering failed for %s", candidate.id)
        view.pages = []
        view.highlights = 0
        view.error = LOAD_ERROR
    return view
