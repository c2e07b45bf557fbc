from __future__ import annotations

from collections import deque
from enum import Enum
from pathlib import Path
from typing import Deque, Dict, Iterable, Optional, Set

from wikilink_ls.core.paths import is_markdown, normalize_note, note_key
from wikilink_ls.errors import UnresolvedReferenceError, VaultNotFound
from wikilink_ls.io.fs import WalkOptions
from wikilink_ls.logging import get_logger
from wikilink_ls.stages.resolve import Resolver, VaultResolver
from wikilink_ls.stages.seeds import normalize_seeds

log = get_logger()

class MissingRefPolicy(Enum):
    FAIL_FAST = "fail-fast"
    WARN_AND_CONTINUE = "warn-and-continue"

def traverse(
    vault_root: Path,
    seeds: Iterable[Path],
    *,
    recursive: bool = False,
    on_missing_ref: MissingRefPolicy = MissingRefPolicy.FAIL_FAST,
    resolver: Optional[Resolver] = None,
    walk_options: WalkOptions = WalkOptions(),
) -> Set[Path]:
    """
    Breadth-first walk of the wikilink graph starting at `seeds`.

    Returns the seeds plus every note they reference (transitively when
    `recursive`). A note is marked visited before it is queued, so each note is
    scanned at most once and cycles terminate. Only markdown targets are
    expanded; attachments are listed but never scanned. Seeds must be files the
    vault walk described by `walk_options` would visit.
    """
    vault_root = Path(vault_root).expanduser()
    if not vault_root.is_dir():
        raise VaultNotFound(vault_root)
    vault_root = normalize_note(vault_root)

    seed_refs = normalize_seeds(vault_root, seeds, walk_options)
    if resolver is None:
        resolver = VaultResolver(vault_root, walk_options)

    visited: Dict[str, Path] = {}
    frontier: Deque[Path] = deque()
    for seed in seed_refs:
        key = note_key(seed)
        if key not in visited:
            visited[key] = seed
            frontier.append(seed)

    scanned = 0
    while frontier:
        note = frontier.popleft()
        scanned += 1
        log.debug("scanning %s", note)

        for raw_link in resolver.list_outbound_links(note):
            target = resolver.resolve_link(vault_root, note, raw_link)
            if target is None:
                if on_missing_ref is MissingRefPolicy.FAIL_FAST:
                    raise UnresolvedReferenceError(note, raw_link)
                log.warning("skipping unresolved reference '%s' from %s", raw_link, note)
                continue

            key = note_key(target)
            if key in visited:
                continue
            visited[key] = target
            if recursive and is_markdown(target):
                frontier.append(target)

    log.debug("traversal done: scanned=%d listed=%d", scanned, len(visited))
    return set(visited.values())
