"""File discovery utilities for scanning module trees."""

from pathlib import Path
from typing import Iterator, Optional, Set


DEFAULT_SOURCE_EXTENSIONS = {".java", ".kt", ".xml"}
RESOURCE_FILE_EXTENSIONS = {".xml", ".png", ".webp", ".jpg", ".jpeg", ".gif", ".ttf", ".otf"}

SOURCE_ROOT = Path("src")
RESOURCE_ROOT = Path("src") / "main" / "res"


def iter_files(root: Path, include_ext: Set[str]) -> Iterator[Path]:
    """
    Iterate over files in a directory tree in a stable order.
    
    Args:
        root: Root directory to scan. A missing root yields nothing.
        include_ext: Set of lower-case file extensions to include (e.g., {'.xml'}).
    
    Yields:
        Path objects for matching files.
    """
    if not root.is_dir():
        return
    
    def _walk(current: Path) -> Iterator[Path]:
        for entry in sorted(current.iterdir()):
            if entry.is_dir():
                yield from _walk(entry)
            elif entry.is_file():
                if entry.suffix.lower() in include_ext:
                    yield entry
    
    yield from _walk(root)


def iter_source_files(module_root: Path, extensions: Optional[Set[str]] = None) -> Iterator[Path]:
    """Iterate over the code and markup files under ``<module>/src``."""
    if extensions is None:
        extensions = DEFAULT_SOURCE_EXTENSIONS
    return iter_files(module_root / SOURCE_ROOT, include_ext=extensions)


def iter_resource_files(module_root: Path) -> Iterator[Path]:
    """Iterate over resource definition files under ``<module>/src/main/res``."""
    return iter_files(module_root / RESOURCE_ROOT, include_ext=RESOURCE_FILE_EXTENSIONS)


def resource_name_of_file(path: Path) -> str:
    """
    Resource name of a standalone resource file.
    
    Everything after the first dot is extension, so nine-patch images
    (``button.9.png``) are named ``button``.
    """
    return path.name.split(".", 1)[0]
