"""Vendor signature matching over a page snapshot."""

import re
from typing import Mapping, Sequence

from ..models import PageSnapshot

PatternTable = Mapping[str, Sequence[re.Pattern]]


def detect_tools(patterns: PatternTable, snapshot: PageSnapshot) -> list[str]:
    """Return the tools whose signatures appear in the script URLs or the HTML.

    Script URLs are checked before the raw HTML. Names are deduplicated and
    keep their first-detected order.
    """
    detected: list[str] = []

    for script in snapshot.scripts:
        for tool, signatures in patterns.items():
            if tool not in detected and any(sig.search(script) for sig in signatures):
                detected.append(tool)

    for tool, signatures in patterns.items():
        if tool not in detected and any(sig.search(snapshot.html) for sig in signatures):
            detected.append(tool)

    return detected
