# shortlist/matching.py
from __future__ import annotations
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

_SPLIT_RX = re.compile(r"[\s,]+")


@dataclass
class MatchResult:
    total_hits: int
    has_any_hit: Optional[bool]   # None: text not extracted yet
    per_term: Dict[str, int] = field(default_factory=dict)


def parse_keywords(raw: Optional[str]) -> List[str]:
    raw = (raw or "").strip()
    if not raw:
        return []
    return [k for k in _SPLIT_RX.split(raw.lower()) if k]


@lru_cache(maxsize=256)
def _term_rx(term: str) -> re.Pattern:
    return re.compile(re.escape(term), re.I)


def _iter_hits(text: str, terms: Iterable[str]):
    for term in terms:
        for m in _term_rx(term).finditer(text):
            yield term, m


def count_matches(text: Optional[str], terms: Sequence[str]) -> MatchResult:
    """Count non-overlapping, case-insensitive literal occurrences of every term."""
    if text is None:
        return MatchResult(total_hits=0, has_any_hit=None)
    per_term: Dict[str, int] = {}
    for term, _ in _iter_hits(text, terms):
        per_term[term] = per_term.get(term, 0) + 1
    total = sum(per_term.values())
    return MatchResult(total_hits=total, has_any_hit=total > 0, per_term=per_term)


def find_hits(text: Optional[str], terms: Sequence[str]) -> List[Tuple[int, int]]:
    """Character spans of every counted hit, in text order."""
    if not text:
        return []
    return sorted(m.span() for _, m in _iter_hits(text, terms))


def has_hit(text: Optional[str], terms: Sequence[str]) -> bool:
    return bool(text) and any(_term_rx(t).search(text) for t in terms)
