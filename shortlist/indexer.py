"""
Background text extraction for ingested candidates.

A single worker drains a FIFO queue, one PDF at a time. The blocking parse
runs in a thread via ``asyncio.to_thread``; its result is written back on the
event-loop thread, so the session is only ever mutated from one place.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Callable, Deque, Iterable, Optional

from .candidates import Candidate
from .extract import extract_text
from .regions import Region, classify
from .state import Session

logger = logging.getLogger("shortlist.indexer")

DEFAULT_REGION_WINDOW = 1500


class ExtractionQueue:
    def __init__(
        self,
        session: Session,
        extractor: Callable[[object], str] = extract_text,
        region_window: int = DEFAULT_REGION_WINDOW,
        on_progress: Optional[Callable[[str], None]] = None,
        on_indexed: Optional[Callable[[Candidate], None]] = None,
    ):
        self.session = session
        self.extractor = extractor
        self.region_window = region_window
        self.on_progress = on_progress
        self.on_indexed = on_indexed
        self._pending: Deque[Candidate] = deque()
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def __len__(self) -> int:
        return len(self._pending)

    def enqueue(self, candidates: Iterable[Candidate]) -> None:
        self._pending.extend(candidates)

    def _progress(self, message: str) -> None:
        logger.info(message)
        if self.on_progress:
            self.on_progress(message)

    async def extract_one(self, candidate: Candidate) -> None:
        try:
            text = await asyncio.to_thread(self.extractor, candidate.source.path)
            region = classify(text[: self.region_window])
        except Exception:
            logger.exception("Extraction failed for %s", candidate.id)
            text, region = "", Region.OTHERS
        candidate.set_extraction(text, region)
        logger.debug("Indexed %s as %s", candidate.id, region.value)

    async def drain(self) -> int:
        """Process queued candidates until the queue is empty; returns how many were indexed.

        Only one drain runs at a time; a second call while one is active returns 0.
        """
        if self._running:
            return 0
        self._running = True
        done = 0
        try:
            while self._pending:
                candidate = self._pending.popleft()
                total = len(self.session.candidates)
                self._progress(f"Indexing... {total - len(self._pending)}/{total}")
                await self.extract_one(candidate)
                done += 1
                # a freshly indexed candidate may be the first one the filters admit
                self.session.refocus()
                if self.on_indexed:
                    self.on_indexed(candidate)
            self._progress("Indexing complete")
        finally:
            self._running = False
        return done
