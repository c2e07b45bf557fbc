from __future__ import annotations

from pathlib import Path, PurePath
from typing import Iterator, List, Optional, Protocol, Sequence, Tuple

from wikilink_ls.core.paths import is_under, nfc, normalize_note
from wikilink_ls.core.references import collect_references
from wikilink_ls.io.fs import WalkOptions, read_text_utf8, vault_contents
from wikilink_ls.logging import get_logger

log = get_logger()

class Resolver(Protocol):
    """What the traversal engine needs from a wikilink-aware vault."""

    def list_outbound_links(self, note: Path) -> Iterator[str]:
        ...

    def resolve_link(self, vault_root: Path, source: Path, raw_link: str) -> Optional[Path]:
        ...

_Entry = Tuple[Path, Tuple[str, ...], Tuple[str, ...]]

def _ends_with(parts: Sequence[str], tail: Sequence[str]) -> bool:
    return 0 < len(tail) <= len(parts) and tuple(parts[-len(tail):]) == tuple(tail)

def _index(paths: Sequence[Path]) -> List[_Entry]:
    out: List[_Entry] = []
    for p in paths:
        s = nfc(str(p))
        out.append((p, PurePath(s).parts, PurePath(s.casefold()).parts))
    return out

def lookup_filename_in_vault(filename: str, contents: Sequence[Path]) -> Optional[Path]:
    """
    First vault file whose path ends with `filename`, taking into account:
    1. note references written without the .md extension
    2. case-insensitive matching
    3. Unicode normalization form C
    Matching is per path component: "Note" matches "dir/Note.md", never "dir/MyNote.md".
    """
    return _lookup(filename, _index(contents))

def _lookup(filename: str, entries: Sequence[_Entry]) -> Optional[Path]:
    name = nfc(filename)
    exact = PurePath(name).parts
    folded = PurePath(name.casefold()).parts
    if not exact:
        return None
    exact_md = exact[:-1] + (exact[-1] + ".md",)
    folded_md = folded[:-1] + (folded[-1] + ".md",)

    for path, parts, parts_folded in entries:
        if (
            _ends_with(parts, exact)
            or _ends_with(parts, exact_md)
            or _ends_with(parts_folded, folded)
            or _ends_with(parts_folded, folded_md)
        ):
            return path
    return None

class VaultResolver:
    """
    Filesystem-backed resolver. The vault is walked once, on first resolution,
    and every note is read only when its links are listed.
    """

    def __init__(self, vault_root: Path, walk_options: WalkOptions = WalkOptions()) -> None:
        self.vault_root = normalize_note(vault_root)
        self.walk_options = walk_options
        self._entries: Optional[List[_Entry]] = None

    @property
    def entries(self) -> List[_Entry]:
        if self._entries is None:
            contents = vault_contents(self.vault_root, self.walk_options)
            log.debug("vault scan: %d files under %s", len(contents), self.vault_root)
            self._entries = _index(contents)
        return self._entries

    def list_outbound_links(self, note: Path) -> Iterator[str]:
        content = read_text_utf8(note)
        yield from collect_references(content)

    def resolve_link(self, vault_root: Path, source: Path, raw_link: str) -> Optional[Path]:
        hit = _lookup(raw_link, self.entries)
        if hit is None:
            return None
        target = normalize_note(hit)
        if not is_under(normalize_note(vault_root), target):
            log.debug("reference '%s' from %s leaves the vault via %s", raw_link, source, target)
            return None
        return target
