from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from wikilink_ls.core.paths import note_key

def sort_notes(paths: Iterable[Path]) -> List[Path]:
    return sorted(paths, key=note_key)

def format_listing(paths: Iterable[Path]) -> str:
    """One absolute path per line, sorted, so output does not depend on discovery order."""
    lines = [str(p) for p in sort_notes(paths)]
    if not lines:
        return ""
    return "\n".join(lines) + "\n"
