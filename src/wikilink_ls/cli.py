from __future__ import annotations

import argparse
import sys
from pathlib import Path

from wikilink_ls.config import ListConfig, load_config_file
from wikilink_ls.errors import ConfigError, TraversalError
from wikilink_ls.logging import get_logger, set_verbose
from wikilink_ls.pipeline.listing import list_notes
from wikilink_ls.stages.output import format_listing

log = get_logger()

def main(argv=None) -> int:
    p = argparse.ArgumentParser(prog="wlls", description="List Obsidian wiki-linked files")
    p.add_argument("vault_root", help="Path to the vault root")
    p.add_argument("notes", nargs="+", help="One or more note paths (absolute or vault-relative)")
    p.add_argument("-R", "--recursive", action="store_true", help="Recurse through linked markdown notes")
    p.add_argument("--skip-missing-refs", action="store_true", help="Skip unresolved references instead of failing")
    p.add_argument("--include-hidden", action="store_true", help="Also resolve links to hidden files and directories")
    p.add_argument("--config", default=None, help="YAML file with defaults for the flags above")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")

    args = p.parse_args(argv)
    set_verbose(args.verbose)

    try:
        defaults = load_config_file(Path(args.config) if args.config else None)
    except ConfigError as e:
        log.error(str(e))
        return 1

    cfg = ListConfig(
        vault_root=Path(args.vault_root).expanduser().resolve(),
        notes=tuple(Path(n) for n in args.notes),
        recursive=bool(args.recursive or defaults["recursive"]),
        skip_missing_refs=bool(args.skip_missing_refs or defaults["skip_missing_refs"]),
        include_hidden=bool(args.include_hidden or defaults["include_hidden"]),
    )

    try:
        paths = list_notes(cfg)
    except TraversalError as e:
        log.error(str(e))
        return 1

    sys.stdout.write(format_listing(paths))
    return 0

if __name__ == "__main__":
    sys.exit(main())
