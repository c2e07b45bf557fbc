from __future__ import annotations

from typing import Tuple

FENCE = "---"

def normalize_newlines(md: str) -> str:
    return md.replace("\r\n", "\n").replace("\r", "\n")

def split_frontmatter(md: str) -> Tuple[str, str]:
    """
    Split a note into (frontmatter, body).

    Only a block opened by '---' on the very first line and closed by a later
    '---' line counts. An unclosed block is ordinary body text.
    """
    md = normalize_newlines(md)
    if not md.startswith(FENCE):
        return "", md

    lines = md.split("\n")
    if lines[0].strip() != FENCE:
        return "", md

    for i in range(1, len(lines)):
        if lines[i].strip() == FENCE:
            return "\n".join(lines[1:i]), "\n".join(lines[i + 1 :])
    return "", md
