"""Scanner module for file discovery and resource reference extraction."""

from .discovery import iter_files, iter_source_files, iter_resource_files
from .parser import EXTRACTION_RULES, ExtractionRule, scan_line, scan_file
from .builder import scan_module
from .resolver import resolve_module

__all__ = [
    "iter_files",
    "iter_source_files",
    "iter_resource_files",
    "EXTRACTION_RULES",
    "ExtractionRule",
    "scan_line",
    "scan_file",
    "scan_module",
    "resolve_module",
]
