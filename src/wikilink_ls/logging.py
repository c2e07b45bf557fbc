from __future__ import annotations

import logging
import sys

# stdout carries the file listing; diagnostics go to stderr
def get_logger(name: str = "wikilink_ls") -> logging.Logger:
    log = logging.getLogger(name)
    if log.handlers:
        return log
    h = logging.StreamHandler(sys.stderr)
    h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    log.addHandler(h)
    log.setLevel(logging.INFO)
    return log

def set_verbose(verbose: bool, name: str = "wikilink_ls") -> None:
    get_logger(name).setLevel(logging.DEBUG if verbose else logging.INFO)
