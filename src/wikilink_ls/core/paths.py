from __future__ import annotations

import os
import unicodedata
from pathlib import Path

MARKDOWN_SUFFIXES = {".md"}

def nfc(s: str) -> str:
    return unicodedata.normalize("NFC", s)

def normalize_note(p: Path) -> Path:
    """Canonical NoteRef form: absolute, user expanded, symlinks resolved."""
    return Path(p).expanduser().resolve()

def note_key(p: Path) -> str:
    """
    Identity of a note, used for dedup and output order:
    - Unicode NFC, so NFD names (macOS) compare equal to what users type
    - case folded only where the host filesystem is (os.path.normcase)
    """
    return os.path.normcase(nfc(str(p)))

def is_under(root: Path, p: Path) -> bool:
    try:
        Path(p).relative_to(root)
    except ValueError:
        return False
    return True

def is_markdown(p: Path) -> bool:
    return Path(p).suffix.lower() in MARKDOWN_SUFFIXES
