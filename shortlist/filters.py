# shortlist/filters.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .candidates import Candidate
from .matching import count_matches, parse_keywords
from .regions import Region, parse_region_choice


@dataclass(frozen=True)
class FilterState:
    id_substring: str = ""
    keywords: Tuple[str, ...] = ()
    region: Optional[Region] = None     # None = All

    def __post_init__(self):
        # callers may pass a list
        object.__setattr__(self, "keywords", tuple(self.keywords))

    @classmethod
    def from_inputs(cls, id_text: str = "", keyword_text: str = "", region_choice: str = "All") -> "FilterState":
        return cls(
            id_substring=id_text or "",
            keywords=tuple(parse_keywords(keyword_text)),
            region=parse_region_choice(region_choice),
        )

    @property
    def is_active(self) -> bool:
        # The ID box narrows the list but does not count as a screening filter.
        return bool(self.keywords) or self.region is not None

    def describe(self) -> List[str]:
        parts = []
        if self.region is not None:
            parts.append(f"Region: {self.region.value}")
        if self.keywords:
            parts.append(f'Keywords: "{", ".join(self.keywords)}"')
        return parts


def is_visible(candidate: Candidate, filters: FilterState) -> bool:
    """Cheapest check first: ID, then region, then keywords."""
    if filters.id_substring.lower() not in candidate.id.lower():
        return False

    if filters.region is not None:
        if candidate.region is None:
            return False
        if candidate.region != filters.region:
            return False

    if not filters.keywords:
        return True
    if candidate.extracted_text is None:
        # not indexed yet; keep it in view
        return True
    return bool(count_matches(candidate.extracted_text, filters.keywords).has_any_hit)
