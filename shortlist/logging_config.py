import logging
from rich.logging import RichHandler


def setup_logging(level: int | str = logging.INFO) -> None:
    """Configure root logging to use RichHandler for pretty console logs.

    Calling this multiple times is safe; it reconfigures the root handlers.
    """
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
        handlers=[RichHandler(show_time=False, rich_tracebacks=True)],
    )
    # pdfplumber runs on pdfminer, which logs every parsed object at DEBUG
    logging.getLogger("pdfminer").setLevel(max(level, logging.WARNING))


__all__ = ["setup_logging"]
