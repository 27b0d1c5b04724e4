"""Module resolution: a directory plus what it references right now."""

from pathlib import Path
from typing import AbstractSet, Optional, Set

from model.dependency import ModuleInfo
from model.resource_type import ResourceType
from .builder import scan_module


def resolve_module(
    module_root: Path,
    type_filter: AbstractSet[ResourceType],
    extensions: Optional[Set[str]] = None,
) -> ModuleInfo:
    """
    Scan a module and keep only references to resources of the filtered types.
    
    The result reflects the files on disk at call time. Callers must resolve
    again after editing any module; a ModuleInfo is never reused across rounds.
    
    Args:
        module_root: Module directory.
        type_filter: Resource types of interest.
        extensions: Source file extensions to scan.
    
    Returns:
        ModuleInfo for the module. Missing directories resolve to no references.
    """
    dependencies = frozenset(
        dependency
        for dependency in scan_module(module_root, extensions)
        if dependency.type in type_filter
    )
    return ModuleInfo(root=module_root, dependencies=dependencies)
