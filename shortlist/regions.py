# shortlist/regions.py
from __future__ import annotations
import re
from enum import Enum
from typing import List, Optional, Tuple


class Region(str, Enum):
    SWITZERLAND = "Switzerland"
    EUROPE = "Europe"
    DEVELOPED = "Developed"
    OTHERS = "Others"


ALL = "All"

# Substring matching has no word boundaries: keep short tokens ("ch", "uk", "usa") out.
REGION_KEYWORDS: List[Tuple[Region, Tuple[str, ...]]] = [
    (Region.SWITZERLAND, (
        "switzerland", "schweiz", "suisse", "svizzera",
        "zurich", "zürich", "geneva", "genève", "bern", "lausanne", "basel",
        "lucerne", "luzern", "lugano", "st. gallen", "vaud", "ticino",
    )),
    (Region.EUROPE, (
        "united kingdom", "great britain", "england", "scotland", "wales", "london", "edinburgh",
        "france", "paris", "germany", "deutschland", "berlin", "munich", "italy", "italia", "rome", "milano",
        "spain", "espana", "madrid", "barcelona", "netherlands", "holland", "amsterdam", "the hague",
        "belgium", "brussels", "austria", "vienna", "sweden", "stockholm", "norway", "oslo",
        "denmark", "copenhagen", "finland", "helsinki", "ireland", "dublin", "portugal", "lisbon",
        "poland", "warsaw", "czech", "prague", "hungary", "budapest", "greece", "athens",
        "romania", "bulgaria", "slovakia", "croatia", "lithuania", "slovenia", "latvia",
        "estonia", "cyprus", "luxembourg", "malta", "iceland", "liechtenstein",
    )),
    (Region.DEVELOPED, (
        "united states", "u.s.a", "america", "new york", "washington", "california", "texas",
        "canada", "toronto", "vancouver", "montreal", "japan", "tokyo", "osaka",
        "australia", "sydney", "melbourne", "new zealand", "auckland",
        "singapore", "south korea", "seoul", "israel", "tel aviv",
    )),
]

ADDRESS_RX = re.compile(r"Current Address[:\s]+([^\n\r]{2,100})", re.I)
FALLBACK_CHARS = 300


def address_snippet(text: str) -> str:
    """Lower-cased text following the "Current Address" label, else the document head."""
    m = ADDRESS_RX.search(text)
    if m:
        return m.group(1).lower()
    return text[:FALLBACK_CHARS].lower()


def classify(text: Optional[str]) -> Region:
    if not text:
        return Region.OTHERS
    target = address_snippet(text)
    for region, keywords in REGION_KEYWORDS:
        if any(k in target for k in keywords):
            return region
    return Region.OTHERS


def parse_region_choice(value: Optional[str]) -> Optional[Region]:
    """Map a filter choice to a region; None stands for "All"."""
    v = (value or ALL).strip().lower()
    if v == ALL.lower():
        return None
    for region in Region:
        if region.value.lower() == v:
            return region
    raise ValueError(f"Unknown region {value!r}; expected All or one of "
                     + ", ".join(r.value for r in Region))
