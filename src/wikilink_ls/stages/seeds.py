from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from wikilink_ls.core.paths import is_under, normalize_note
from wikilink_ls.errors import SeedNotFound
from wikilink_ls.io.fs import WalkOptions, is_walked

def normalize_seed(vault_root: Path, note: Path, walk_options: WalkOptions = WalkOptions()) -> Path:
    """
    Vault-relative or absolute note path -> NoteRef.
    Raises SeedNotFound when the note is missing, not a file, outside the vault,
    or skipped by the vault walk (hidden files unless walk_options include them).
    """
    note = Path(note).expanduser()
    path = note if note.is_absolute() else vault_root / note
    if not path.exists():
        raise SeedNotFound(path)
    if not path.is_file():
        raise SeedNotFound(path, "note path is not a file")

    canonical = normalize_note(path)
    if not is_under(vault_root, canonical):
        raise SeedNotFound(canonical, "note is outside vault_root")
    if not is_walked(vault_root, canonical, walk_options):
        raise SeedNotFound(canonical, "note not found in vault scan")
    return canonical

def normalize_seeds(
    vault_root: Path,
    notes: Iterable[Path],
    walk_options: WalkOptions = WalkOptions(),
) -> List[Path]:
    # all seeds are checked before any of them is scanned
    return [normalize_seed(vault_root, n, walk_options) for n in notes]
