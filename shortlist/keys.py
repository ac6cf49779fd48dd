from typing import Optional

from .candidates import Status
from .state import Session

KEEP_KEYS = {"right", "arrowright"}
REJECT_KEYS = {"left", "arrowleft"}
UNDO_KEYS = {"ctrl+z", "cmd+z", "meta+z"}


def handle_key(session: Session, key: str, *, input_focused: bool = False) -> Optional[str]:
    """Apply a keyboard shortcut; returns the action taken or None when ignored."""
    if input_focused or not session.candidates or session.current is None:
        return None
    k = key.strip().lower()
    if k in KEEP_KEYS:
        session.judge(Status.KEPT)
        return "keep"
    if k in REJECT_KEYS:
        session.judge(Status.REJECTED)
        return "reject"
    if k in UNDO_KEYS:
        session.undo()
        return "undo"
    return None
