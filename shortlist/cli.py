# shortlist/cli.py
import asyncio
import contextlib
import dataclasses
from pathlib import Path
from typing import Iterable, List

import typer
from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table
from rich import box

from .candidates import IncomingFile
from .config import load_settings, Settings
from .export import ExportError, export_kept
from .extract import extract_text
from .filters import FilterState
from .indexer import ExtractionQueue
from .keys import handle_key
from .logging_config import setup_logging
from .matching import count_matches, parse_keywords
from .preview import render_detail
from .regions import Region, classify, parse_region_choice
from .render import candidate_table, highlighted_text, jinja_env, render_report
from .state import Session

app = typer.Typer(add_completion=False, help="Screen a batch of PDF applications: filter, keep/reject, export")
console = Console()
import logging

logger = logging.getLogger("shortlist.cli")

COMMAND_KEYS = {
    "k": "right", "keep": "right", "right": "right",
    "r": "left", "reject": "left", "left": "left",
    "u": "ctrl+z", "undo": "ctrl+z", "ctrl+z": "ctrl+z",
}

HELP = (
    "[bold]k[/bold]/right keep  [bold]r[/bold]/left reject  [bold]u[/bold]/ctrl+z undo  "
    "[bold]/id[/bold] TEXT  [bold]/kw[/bold] TEXT  [bold]/region[/bold] NAME  "
    "[bold]n[/bold]ext  [bold]goto[/bold] N  [bold]list[/bold]  [bold]view[/bold]  [bold]export[/bold]  [bold]quit[/bold]"
)


def collect_files(paths: Iterable[Path]) -> List[IncomingFile]:
    out = []
    for p in paths:
        if p.is_dir():
            # X.PDF counts as much as x.pdf
            pdfs = sorted(f for f in p.iterdir() if f.is_file() and f.suffix.lower() == ".pdf")
            out.extend(IncomingFile.from_path(f) for f in pdfs)
        else:
            out.append(IncomingFile.from_path(p))
    return out


def show_current(session: Session) -> None:
    c = session.current
    if c is None:
        console.print("[yellow]No candidate selected.[/yellow]")
        return
    region = c.region.value if c.region else "indexing..."
    line = f"[bold]{c.id}[/bold]  ({session.current_index + 1}/{len(session.candidates)})  region={region}  status={c.status.value}"
    terms = session.filters.keywords
    if terms and c.extracted_text is not None:
        line += f"  hits={count_matches(c.extracted_text, terms).total_hits}"
    console.print(line)
    if c.extracted_text:
        console.print(highlighted_text(c.extracted_text, terms))


def apply_command(session: Session, raw: str, s: Settings, env) -> bool:
    """Run one review command; returns False when the user asked to quit."""
    cmd, _, arg = raw.strip().partition(" ")
    cmd = cmd.lower()

    if cmd in ("q", "quit", "exit"):
        return False

    if cmd in COMMAND_KEYS:
        action = handle_key(session, COMMAND_KEYS[cmd])
        if action is None:
            console.print("[yellow]Nothing to do.[/yellow]")
    elif cmd == "/id":
        session.set_filters(dataclasses.replace(session.filters, id_substring=arg))
        console.print(candidate_table(session))
    elif cmd == "/kw":
        session.set_filters(dataclasses.replace(session.filters, keywords=tuple(parse_keywords(arg))))
        console.print(candidate_table(session))
    elif cmd == "/region":
        try:
            region = parse_region_choice(arg or "All")
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            return True
        session.set_filters(dataclasses.replace(session.filters, region=region))
        console.print(candidate_table(session))
    elif cmd in ("n", "next"):
        session.select_next_pending()
    elif cmd == "goto":
        if not (arg.strip().isdigit() and session.select(int(arg) - 1)):
            console.print(f"[red]No candidate #{arg}[/red]")
    elif cmd == "list":
        console.print(candidate_table(session))
        return True
    elif cmd == "view":
        if session.current is None:
            console.print("[yellow]No candidate selected.[/yellow]")
            return True
        detail = render_detail(session.current, s.output_dir, s.render_width, session.filters.keywords)
        if detail.error:
            console.print(f"[red]{detail.error}[/red]")
        out_html = render_report(env, session, s.output_dir, detail)
        console.print(f"[green]Rendered {len(detail.pages)} page(s), {detail.highlights} highlight(s) -> {out_html}[/green]")
        return True
    elif cmd == "export":
        try:
            out = export_kept(session, s.output_dir, s.archive_name, s.archive_folder)
        except ExportError as e:
            console.print(f"[red]{e}[/red]")
            return True
        if out is None:
            console.print("[yellow]Nothing kept yet.[/yellow]")
        else:
            console.print(f"[green]Saved {out}[/green]")
        return True
    else:
        console.print(HELP)
        return True

    if session.notice:
        console.print(f"[cyan]{session.notice}[/cyan]")
    show_current(session)
    return True


async def review_loop(session: Session, files: List[IncomingFile], s: Settings) -> None:
    env = jinja_env()

    def on_indexed(c):
        if session.filters.is_active and session.is_visible(c):
            logger.info("%s now matches the active filter", c.id)

    queue = ExtractionQueue(session, region_window=s.region_window, on_indexed=on_indexed)
    queue.enqueue(session.ingest(files))
    _, total = session.counts()
    console.print(f"[cyan]{total} candidate(s) loaded.[/cyan]")
    worker = asyncio.create_task(queue.drain())

    console.print(HELP)
    show_current(session)
    try:
        while True:
            raw = await asyncio.to_thread(Prompt.ask, "[bold]>[/bold]", default="", show_default=False)
            if not apply_command(session, raw, s, env):
                break
    finally:
        if not worker.done():
            worker.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await worker
    kept, total = session.counts()
    console.print(f"[green]Done: kept {kept} of {total}.[/green]")


@app.command("review")
def review(
    paths: List[Path] = typer.Argument(..., help="PDF files or folders of PDFs"),
    id_filter: str = typer.Option("", "--id", help="Show only IDs containing this text"),
    keywords: str = typer.Option("", "--keywords", "-k", help="Keywords, separated by spaces or commas"),
    region: str = typer.Option("All", "--region", help="All, Switzerland, Europe, Developed or Others"),
):
    s = load_settings()
    setup_logging(s.log_level)
    try:
        filters = FilterState.from_inputs(id_filter, keywords, region)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=2)
    session = Session(filters)
    files = collect_files(paths)
    if not files:
        console.print("[yellow]No files given.[/yellow]")
        raise typer.Exit(code=1)
    asyncio.run(review_loop(session, files, s))


@app.command("classify")
def classify_cmd(
    paths: List[Path] = typer.Argument(..., help="PDF files or folders of PDFs"),
):
    s = load_settings()
    setup_logging(s.log_level)
    table = Table(title="Regions", box=box.SIMPLE_HEAVY)
    table.add_column("ID")
    table.add_column("Region")
    session = Session()
    for c in session.ingest(collect_files(paths)):
        try:
            region = classify(extract_text(c.source.path)[: s.region_window])
        except Exception:
            logger.exception("Extraction failed for %s", c.id)
            region = Region.OTHERS
        table.add_row(c.id, region.value)
    console.print(table)


def main():
    app()

if __name__ == "__main__":
    main()
