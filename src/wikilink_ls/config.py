from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from wikilink_ls.errors import ConfigError
from wikilink_ls.io.fs import WalkOptions
from wikilink_ls.pipeline.traverse import MissingRefPolicy

# keys a config file may set; everything else is positional on the command line
DEFAULT_CONFIG: Dict[str, bool] = {
    "recursive": False,
    "skip_missing_refs": False,
    "include_hidden": False,
}

@dataclass(frozen=True)
class ListConfig:
    vault_root: Path
    notes: Tuple[Path, ...]
    recursive: bool = False
    skip_missing_refs: bool = False   # warn and continue instead of failing on broken links
    include_hidden: bool = False      # walk dotfiles / dot-directories when resolving

    @property
    def missing_ref_policy(self) -> MissingRefPolicy:
        if self.skip_missing_refs:
            return MissingRefPolicy.WARN_AND_CONTINUE
        return MissingRefPolicy.FAIL_FAST

    @property
    def walk_options(self) -> WalkOptions:
        return WalkOptions(ignore_hidden=not self.include_hidden)

def load_config_file(path: Optional[Path]) -> Dict[str, bool]:
    """
    Defaults merged with an optional YAML file such as:

        recursive: true
        skip_missing_refs: false
    """
    cfg = dict(DEFAULT_CONFIG)
    if path is None:
        return cfg

    path = Path(path).expanduser()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read config file {path}: {e}") from e
    try:
        data: Any = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed YAML in config file {path}: {e}") from e

    if data is None:
        return cfg
    if not isinstance(data, dict):
        raise ConfigError(f"Malformed config file {path}: top-level must be a mapping")

    for k, v in data.items():
        if k not in DEFAULT_CONFIG:
            raise ConfigError(f"Unknown key in config file {path}: {k}")
        if not isinstance(v, bool):
            raise ConfigError(f"Config key '{k}' in {path} must be true or false, got {v!r}")
        cfg[k] = v
    return cfg
