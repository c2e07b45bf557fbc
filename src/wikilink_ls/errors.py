from __future__ import annotations

from pathlib import Path

class TraversalError(Exception):
    """Base class for every error that aborts a listing run."""

class VaultNotFound(TraversalError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"vault root is not a directory: {path}")

class SeedNotFound(TraversalError):
    def __init__(self, path: Path, reason: str = "note path does not exist") -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path}")

class UnresolvedReferenceError(TraversalError):
    def __init__(self, source: Path, raw_link: str) -> None:
        self.source = source
        self.raw_link = raw_link
        super().__init__(f"could not resolve reference '{raw_link}' from {source}")

class VaultIOError(TraversalError):
    """A note could not be read; the underlying error is chained as __cause__."""

    def __init__(self, path: Path, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"failed to read note {path}: {cause}")

class ConfigError(ValueError):
    pass
