from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from rich import box
from rich.table import Table
from rich.text import Text

from .candidates import Status
from .matching import count_matches, find_hits
from .preview import DetailView
from .regions import Region
from .state import Session

TEMPLATES_DIR = Path(__file__).parent / "templates"

STATUS_STYLE = {
    Status.PENDING: ("○", "dim"),
    Status.KEPT: ("✔", "green"),
    Status.REJECTED: ("✘", "red"),
}


@dataclass
class ListRow:
    index: int
    id: str
    status: str
    region_tag: str          # "" for Others / not indexed yet
    matches: int
    active: bool

    @property
    def badge(self) -> str:
        if self.matches <= 0:
            return ""
        return "99+" if self.matches > 99 else str(self.matches)


def list_rows(session: Session) -> List[ListRow]:
    terms = session.filters.keywords
    rows = []
    for i, c in session.visible():
        hits = count_matches(c.extracted_text, terms).total_hits if terms else 0
        tag = c.region.value if c.region and c.region != Region.OTHERS else ""
        rows.append(ListRow(index=i, id=c.id, status=c.status.value, region_tag=tag,
                            matches=hits, active=i == session.current_index))
    return rows


def filter_info(session: Session, rows: List[ListRow]) -> Optional[str]:
    parts = session.filters.describe()
    if not parts:
        return None
    return f"Filtering by {' & '.join(parts)} - {len(rows)} matches"


def highlighted_text(text: str, terms, width: int = 400) -> Text:
    """Rich text of the head of a document with keyword hits styled."""
    head = text[:width]
    out = Text(head)
    for start, end in find_hits(head, terms):
        out.stylize("bold black on yellow", start, end)
    return out


def candidate_table(session: Session) -> Table:
    rows = list_rows(session)
    kept, total = session.counts()
    table = Table(title=f"Candidates (kept {kept}/{total})", caption=filter_info(session, rows),
                  box=box.SIMPLE_HEAVY)
    table.add_column("#", justify="right")
    table.add_column("ID")
    table.add_column("Region")
    table.add_column("Hits", justify="right")
    table.add_column("Status")
    for r in rows:
        mark, style = STATUS_STYLE[Status(r.status)]
        table.add_row(
            str(r.index + 1),
            Text(r.id, style="bold reverse" if r.active else ""),
            r.region_tag,
            f"{r.badge} hits" if r.badge else "",
            Text(mark, style=style),
        )
    return table


def jinja_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"])
    )


def render_report(env, session: Session, out_dir: str, detail: Optional[DetailView] = None) -> str:
    rows = list_rows(session)
    kept, total = session.counts()
    html = env.get_template("review.html.j2").render(
        rows=rows,
        filter_info=filter_info(session, rows),
        kept=kept,
        total=total,
        detail=detail,
        notice=session.notice,
        title="Screening",
    )
    out_path = Path(out_dir) / "review.html"
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(html, encoding="utf-8")
    return str(out_path)
