"""Shared value types for resource scanning, moving and removal."""

from .resource_type import (
    ResourceType,
    classify,
    classify_directory,
    classify_element,
    derive_type_filter,
    resource_type_of_path,
    type_to_raw_name,
)
from .dependency import ResourceDependency, ModuleInfo
from .errors import (
    ResourceMoverError,
    ConfigurationError,
    ScanError,
    DocumentParseError,
)
from .report import RoundResult, RunReport

__all__ = [
    "ResourceType",
    "classify",
    "classify_directory",
    "classify_element",
    "derive_type_filter",
    "resource_type_of_path",
    "type_to_raw_name",
    "ResourceDependency",
    "ModuleInfo",
    "ResourceMoverError",
    "ConfigurationError",
    "ScanError",
    "DocumentParseError",
    "RoundResult",
    "RunReport",
]
