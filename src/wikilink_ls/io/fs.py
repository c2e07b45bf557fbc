from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

from wikilink_ls.errors import VaultIOError

@dataclass(frozen=True)
class WalkOptions:
    ignore_hidden: bool = True        # skip dotfiles and dot-directories (.obsidian, .git, ...)

def _is_hidden(root: Path, p: Path) -> bool:
    return any(part.startswith(".") for part in p.relative_to(root).parts)

def is_walked(root: Path, p: Path, options: WalkOptions = WalkOptions()) -> bool:
    """Whether the vault walk with `options` visits `p` (a path under `root`)."""
    return not (options.ignore_hidden and _is_hidden(root, p))

def iter_vault_files(root: Path, options: WalkOptions = WalkOptions()) -> Iterable[Path]:
    for p in sorted(root.rglob("*")):
        if not is_walked(root, p, options):
            continue
        if p.is_file():
            yield p

def vault_contents(root: Path, options: WalkOptions = WalkOptions()) -> List[Path]:
    """Every file in the vault, attachments included, in sorted path order."""
    return list(iter_vault_files(root, options))

def read_text_utf8(p: Path) -> str:
    try:
        data = p.read_bytes()
        return data.decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise VaultIOError(p, e) from e
