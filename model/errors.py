"""Error types raised while scanning, editing or orchestrating resource moves."""

from pathlib import Path
from typing import Optional


class ResourceMoverError(Exception):
    """Base class for every error raised by the resource mover."""


class ConfigurationError(ResourceMoverError):
    """Invalid run configuration. Always raised before any file is touched."""


class ScanError(ResourceMoverError):
    """A source file could not be read while collecting references."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot scan '{path}': {reason}")


class DocumentParseError(ResourceMoverError):
    """A resource document is not well-formed markup."""

    def __init__(self, path: Optional[Path], reason: str):
        self.path = path
        self.reason = reason
        where = f"'{path}'" if path is not None else "document"
        super().__init__(f"Cannot parse {where}: {reason}")
