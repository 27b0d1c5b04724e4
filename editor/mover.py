"""Relocation of resource definitions from one module to another."""

import logging
import shutil
from pathlib import Path
from typing import AbstractSet, Optional

from model.dependency import ResourceDependency
from model.resource_type import resource_type_of_path
from scanner.discovery import iter_resource_files, resource_name_of_file
from .document import (
    element_key,
    empty_container,
    detach,
    line_ending,
    text_node,
    trim_end,
    trim_start,
    with_line_ending,
)
from .files import load_document, save_document

logger = logging.getLogger(__name__)


def standalone_key(path: Path) -> Optional[ResourceDependency]:
    """Identity of a resource that is a whole file, from its directory and name."""
    resource_type = resource_type_of_path(path)
    if resource_type is None:
        return None
    return ResourceDependency(type=resource_type, name=resource_name_of_file(path))


def move_resources(
    from_directory: Path,
    to_directory: Path,
    resources: AbstractSet[ResourceDependency],
) -> int:
    """
    Move resources from one module to another.
    
    Every resource file of ``from_directory`` is matched against
    ``resources``; matching definitions end up at the same relative path
    under ``to_directory``.
    
    Args:
        from_directory: Module to take resources from.
        to_directory: Module to move resources into.
        resources: Resources that should be moved.
    
    Returns:
        Number of resources moved.
    """
    if not resources:
        return 0
    
    total = 0
    for from_file in list(iter_resource_files(from_directory)):
        to_file = to_directory / from_file.relative_to(from_directory)
        total += apply_move(from_file, to_file, resources)
    return total


def apply_move(
    from_file: Path,
    to_file: Path,
    resources: AbstractSet[ResourceDependency],
) -> int:
    """
    Move the matching resources defined in ``from_file`` into ``to_file``.
    
    Standalone resource files are moved whole. For container documents each
    matching element is detached along with its indentation and comment and
    appended to the destination document, which is created if needed. A
    resource the destination already defines stays where it is. A container
    left without elements is deleted. Moved whitespace takes the line ending
    of the destination.
    
    Returns:
        Number of resources moved out of ``from_file``.
    """
    if from_file.suffix.lower() != ".xml":
        return _move_standalone(from_file, to_file, resources)
    
    source = load_document(from_file)
    if not source.is_container:
        return _move_standalone(from_file, to_file, resources)
    
    elements_to_move = [node for node in source.elements if element_key(node) in resources]
    if not elements_to_move:
        return 0
    
    if to_file.exists():
        destination = load_document(to_file)
        if not destination.is_container:
            logger.warning("Not moving into %s: it is not a resources document", to_file)
            return 0
    else:
        destination = empty_container()
    
    already_defined = {element_key(node) for node in destination.elements}
    for node in [n for n in elements_to_move if element_key(n) in already_defined]:
        logger.warning("Not moving %s: %s already defines it", element_key(node), to_file)
        elements_to_move.remove(node)
    if not elements_to_move:
        return 0
    
    newline = line_ending(destination.children)
    moved_content = []
    for node in elements_to_move:
        moved_content.extend(with_line_ending(n, newline) for n in detach(source.children, node))
    
    trim_end(destination.children)
    destination.children.extend(moved_content)
    trim_start(destination.children, newline=newline)
    destination.children.append(text_node(newline))
    
    # Destination first: a failure in between leaves a copy rather than nothing
    save_document(destination, to_file)
    if source.elements:
        save_document(source, from_file)
    else:
        from_file.unlink()
        logger.debug("Deleted emptied %s", from_file)
    
    logger.debug("Moved %d resource(s) from %s to %s", len(elements_to_move), from_file, to_file)
    return len(elements_to_move)


def _move_standalone(
    from_file: Path,
    to_file: Path,
    resources: AbstractSet[ResourceDependency],
) -> int:
    if standalone_key(from_file) not in resources:
        return 0
    
    if to_file.exists():
        logger.warning("Not moving %s: %s already exists", from_file, to_file)
        return 0
    
    to_file.parent.mkdir(parents=True, exist_ok=True)
    shutil.move(str(from_file), str(to_file))
    logger.debug("Moved %s to %s", from_file, to_file)
    return 1
