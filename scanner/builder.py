"""Module scanning: unions the references of every source file in a module."""

import logging
from pathlib import Path
from typing import Optional, Set

from model.dependency import ResourceDependency
from .discovery import iter_source_files
from .parser import scan_file

logger = logging.getLogger(__name__)


def scan_module(module_root: Path, extensions: Optional[Set[str]] = None) -> Set[ResourceDependency]:
    """
    Collect all resources referenced anywhere under a module's source tree.
    
    Args:
        module_root: Module directory (the one containing ``src``).
        extensions: Source file extensions to scan (default: .java, .kt, .xml).
    
    Returns:
        Set of referenced resources. Empty when the module has no ``src``.
    
    Raises:
        ScanError: If any source file cannot be read. No partial result is returned.
    """
    dependencies: Set[ResourceDependency] = set()
    files_scanned = 0
    
    for file_path in iter_source_files(module_root, extensions):
        dependencies.update(scan_file(file_path))
        files_scanned += 1
    
    logger.debug(
        "Scanned %d file(s) in %s: %d reference(s)",
        files_scanned, module_root, len(dependencies),
    )
    return dependencies
