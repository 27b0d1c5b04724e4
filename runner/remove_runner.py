"""Round based orchestration of deleting unused resources from a module."""

import logging
import re
from pathlib import Path
from typing import AbstractSet, Iterable, Optional, Pattern, Set, Union

from editor.remover import remove_resources
from model.errors import ConfigurationError
from model.report import RunReport
from model.resource_type import ALL_RESOURCE_TYPES, ResourceType
from scanner.resolver import resolve_module
from .config import DEFAULT_MAX_ROUNDS
from .move_runner import check_max_rounds
from .progress import ProgressLogger, quiet

logger = logging.getLogger(__name__)


def compile_ignore_pattern(pattern: Union[str, Pattern[str], None]) -> Optional[Pattern[str]]:
    if pattern is None or isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigurationError(f"Invalid ignore pattern {pattern!r}: {e}") from e


def remove(
    target: Path,
    protected: Iterable[Path] = (),
    type_filter: AbstractSet[ResourceType] = ALL_RESOURCE_TYPES,
    max_rounds: int = DEFAULT_MAX_ROUNDS,
    ignore_pattern: Union[str, Pattern[str], None] = None,
    progress: Optional[ProgressLogger] = None,
    source_extensions: Optional[Set[str]] = None,
) -> int:
    """Remove unused resources and return how many were removed. See run_remove."""
    return run_remove(
        target=target,
        protected=protected,
        type_filter=type_filter,
        max_rounds=max_rounds,
        ignore_pattern=ignore_pattern,
        progress=progress,
        source_extensions=source_extensions,
    ).total


def run_remove(
    target: Path,
    protected: Iterable[Path] = (),
    type_filter: AbstractSet[ResourceType] = ALL_RESOURCE_TYPES,
    max_rounds: int = DEFAULT_MAX_ROUNDS,
    ignore_pattern: Union[str, Pattern[str], None] = None,
    progress: Optional[ProgressLogger] = None,
    source_extensions: Optional[Set[str]] = None,
) -> RunReport:
    """
    Delete resources defined in ``target`` that nothing references.
    
    A resource is kept when its name is referenced by the target itself or
    by any protected module, or when it matches ``ignore_pattern``. Deleting
    a resource can leave the resources it referenced unused, so rounds
    repeat until a round deletes nothing or the round cap is reached.
    
    Args:
        target: Module to delete unused resources from.
        protected: Modules depending on the target.
        type_filter: Resource types that may be deleted.
        max_rounds: Round cap.
        ignore_pattern: Names matching this are never deleted.
        progress: Receiver of progress messages (default: silent).
        source_extensions: Source file extensions to scan for references.
    
    Returns:
        RunReport with per-round counts.
    """
    protected = [Path(p) for p in protected]
    check_max_rounds(max_rounds)
    ignore = compile_ignore_pattern(ignore_pattern)
    
    if progress is None:
        progress = quiet()
    
    report = RunReport(
        operation="remove",
        source=Path(target),
        protected=protected,
        max_rounds=max_rounds,
    )
    
    round_number = 1
    active = True
    while active:
        with progress.frame(f"Round #{round_number}") as depth:
            removed = _run_remove_round(
                target=report.source,
                protected=protected,
                type_filter=type_filter,
                ignore_pattern=ignore,
                source_extensions=source_extensions,
            )
            report.add_round(removed, {report.source: removed})
            
            if removed > 0:
                progress.log(
                    f"Removed {progress.green(removed)} resource(s). Attempting another round of "
                    "removal to see if new dependencies were introduced.",
                    depth,
                )
                round_number += 1
            else:
                progress.log("No resources were removed. Removal is done.", depth)
                active = False
            
            if round_number > max_rounds:
                progress.log(
                    progress.red(f"Exceeded maximum removal rounds ({max_rounds}). Terminating removal."),
                    depth,
                )
                report.truncated = True
                active = False
    
    with progress.frame("Resource removal finished.") as depth:
        progress.log(f"{report.total} resource(s) removed over {report.rounds_run} round(s).", depth)
    
    logger.info("Remove finished: %r", report)
    return report


def _run_remove_round(
    target: Path,
    protected: Iterable[Path],
    type_filter: AbstractSet[ResourceType],
    ignore_pattern: Optional[Pattern[str]],
    source_extensions: Optional[Set[str]],
) -> int:
    names_to_keep = set(resolve_module(target, type_filter, source_extensions).names)
    for module_root in protected:
        names_to_keep |= resolve_module(module_root, type_filter, source_extensions).names
    
    return remove_resources(
        directory=target,
        types_to_remove=type_filter,
        names_to_keep=names_to_keep,
        ignore_pattern=ignore_pattern,
    )
