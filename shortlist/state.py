import logging
from typing import Iterable, List, Optional, Set, Tuple

from .candidates import Candidate, HistoryEntry, IncomingFile, PDF_MEDIA_TYPE, Status, candidate_id
from .filters import FilterState, is_visible

logger = logging.getLogger("shortlist.state")

NO_MORE_MATCHING = "No more pending candidates matching filter."
ALL_SCREENED = "All candidates screened!"


class Session:
    """In-memory review session: candidates, focus, undo history and the shared filter state.

    All mutation happens on one thread of control; the indexer only writes
    extraction results back through Candidate.set_extraction on that thread.
    """

    def __init__(self, filters: Optional[FilterState] = None):
        self.candidates: List[Candidate] = []
        self.current_index: int = -1
        self.history: List[HistoryEntry] = []
        self.filters: FilterState = filters or FilterState()
        self.notice: Optional[str] = None
        self._ids: Set[str] = set()

    @property
    def current(self) -> Optional[Candidate]:
        if 0 <= self.current_index < len(self.candidates):
            return self.candidates[self.current_index]
        return None

    def ingest(self, files: Iterable[IncomingFile]) -> List[Candidate]:
        added: List[Candidate] = []
        for f in files:
            if f.media_type != PDF_MEDIA_TYPE:
                logger.debug("Dropping non-PDF %s (%s)", f.name, f.media_type)
                continue
            cid = candidate_id(f.name)
            if cid in self._ids:
                logger.debug("Skipping duplicate candidate %s", cid)
                continue
            c = Candidate(id=cid, source=f)
            self._ids.add(cid)
            self.candidates.append(c)
            added.append(c)
        if added:
            logger.info("Ingested %d new candidate(s), %d total", len(added), len(self.candidates))
        if added and self.current_index == -1:
            self.select_next_pending()
        return added

    def set_filters(self, filters: FilterState) -> None:
        self.filters = filters
        logger.debug("Filters now %s", filters.describe() or ["none"])
        self.refocus()

    def refocus(self) -> Optional[int]:
        """Move to a visible Pending candidate when nothing judgeable is focused.

        Called after filters change and after a candidate is indexed; a focused
        Pending candidate is left alone.
        """
        c = self.current
        if c is not None and c.status == Status.PENDING:
            return None
        i = self._next_pending()
        if i is not None:
            self.current_index = i
            self.notice = None
            logger.debug("Refocus -> %d (%s)", i, self.candidates[i].id)
        return i

    def is_visible(self, candidate: Candidate) -> bool:
        return is_visible(candidate, self.filters)

    def visible(self) -> List[Tuple[int, Candidate]]:
        return [(i, c) for i, c in enumerate(self.candidates) if self.is_visible(c)]

    def select(self, index: int) -> bool:
        if not 0 <= index < len(self.candidates):
            return False
        self.current_index = index
        return True

    def judge(self, status: Status) -> Optional[int]:
        if status not in (Status.KEPT, Status.REJECTED):
            raise ValueError(f"Cannot judge a candidate as {status}")
        c = self.current
        if c is None or c.status != Status.PENDING:
            # verdicts only move Pending candidates; undo is the way back
            return None
        self.history.append(HistoryEntry(index=self.current_index, previous_status=c.status))
        c.status = status
        logger.info("%s -> %s", c.id, status.value)
        return self.select_next_pending()

    def _next_pending(self) -> Optional[int]:
        n = len(self.candidates)
        start = self.current_index + 1
        order = list(range(start, n)) + list(range(0, min(start, n)))
        for i in order:
            if i == self.current_index:
                continue
            c = self.candidates[i]
            if c.status == Status.PENDING and self.is_visible(c):
                return i
        return None

    def select_next_pending(self) -> Optional[int]:
        """Focus the next visible Pending candidate after the current one, wrapping once."""
        i = self._next_pending()
        if i is not None:
            self.current_index = i
            self.notice = None
            logger.debug("Focus -> %d (%s)", i, self.candidates[i].id)
            return i
        self.notice = NO_MORE_MATCHING if self.filters.is_active else ALL_SCREENED
        logger.info(self.notice)
        return None

    def undo(self) -> Optional[int]:
        if not self.history:
            return None
        entry = self.history.pop()
        c = self.candidates[entry.index]
        c.status = entry.previous_status
        self.current_index = entry.index
        self.notice = None
        logger.info("Undo: %s back to %s", c.id, c.status.value)
        return entry.index

    def kept(self) -> List[Candidate]:
        return [c for c in self.candidates if c.status == Status.KEPT]

    def counts(self) -> Tuple[int, int]:
        """(kept, total)"""
        return len(self.kept()), len(self.candidates)
