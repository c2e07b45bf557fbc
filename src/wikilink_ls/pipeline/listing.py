from __future__ import annotations

from pathlib import Path
from typing import List

from wikilink_ls.config import ListConfig
from wikilink_ls.logging import get_logger
from wikilink_ls.pipeline.traverse import traverse
from wikilink_ls.stages.output import sort_notes

log = get_logger()

def list_notes(cfg: ListConfig) -> List[Path]:
    """Run one traversal for `cfg` and return the sorted result."""
    found = traverse(
        cfg.vault_root,
        cfg.notes,
        recursive=cfg.recursive,
        on_missing_ref=cfg.missing_ref_policy,
        walk_options=cfg.walk_options,
    )
    log.debug(
        "listed %d files: seeds=%d recursive=%s policy=%s",
        len(found), len(cfg.notes), cfg.recursive, cfg.missing_ref_policy.value,
    )
    return sort_notes(found)
