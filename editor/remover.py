"""Deletion of unreferenced resource definitions."""

import logging
from pathlib import Path
from typing import AbstractSet, Optional, Pattern

from model.resource_type import ResourceType, resource_type_of_path
from scanner.discovery import iter_resource_files, resource_name_of_file
from .document import Node, detach, element_name, element_type, raw_element_name
from .files import load_document, save_document

logger = logging.getLogger(__name__)


def _is_ignored(name: Optional[str], ignore_pattern: Optional[Pattern[str]]) -> bool:
    return ignore_pattern is not None and ignore_pattern.search(name or "") is not None


def remove_resources(
    directory: Path,
    types_to_remove: AbstractSet[ResourceType],
    names_to_keep: AbstractSet[str],
    ignore_pattern: Optional[Pattern[str]] = None,
) -> int:
    """
    Delete every resource defined in ``directory`` that is not referenced.
    
    Args:
        directory: Module to delete resources from.
        types_to_remove: Only resources of these types are deleted.
        names_to_keep: Names of referenced resources.
        ignore_pattern: Resources whose name matches are kept even if unused.
    
    Returns:
        Number of resources deleted.
    """
    total = 0
    for file_path in list(iter_resource_files(directory)):
        total += apply_remove(file_path, names_to_keep, types_to_remove, ignore_pattern)
    return total


def apply_remove(
    file_path: Path,
    names_to_keep: AbstractSet[str],
    types_to_remove: AbstractSet[ResourceType],
    ignore_pattern: Optional[Pattern[str]] = None,
) -> int:
    """Delete the unreferenced resources defined in one file."""
    if file_path.suffix.lower() != ".xml":
        return _remove_standalone(file_path, names_to_keep, types_to_remove, ignore_pattern)
    
    document = load_document(file_path)
    if not document.is_container:
        return _remove_standalone(file_path, names_to_keep, types_to_remove, ignore_pattern)
    
    def should_remove(node: Node) -> bool:
        name = element_name(node)
        return (
            name is not None
            and element_type(node) in types_to_remove
            and name not in names_to_keep
            and not _is_ignored(raw_element_name(node), ignore_pattern)
        )
    
    elements_to_delete = [node for node in document.elements if should_remove(node)]
    if not elements_to_delete:
        return 0
    
    for node in elements_to_delete:
        detach(document.children, node)
    
    if document.elements:
        save_document(document, file_path)
    else:
        file_path.unlink()
        logger.debug("Deleted emptied %s", file_path)
    
    logger.debug("Removed %d resource(s) from %s", len(elements_to_delete), file_path)
    return len(elements_to_delete)


def _remove_standalone(
    file_path: Path,
    names_to_keep: AbstractSet[str],
    types_to_remove: AbstractSet[ResourceType],
    ignore_pattern: Optional[Pattern[str]],
) -> int:
    name = resource_name_of_file(file_path)
    if (
        resource_type_of_path(file_path) in types_to_remove
        and name not in names_to_keep
        and not _is_ignored(name, ignore_pattern)
    ):
        file_path.unlink()
        logger.debug("Deleted %s", file_path)
        return 1
    return 0
