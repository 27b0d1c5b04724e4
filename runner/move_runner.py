"""Round based orchestration of moving resources between modules."""

import logging
from pathlib import Path
from typing import AbstractSet, Dict, Iterable, List, Optional, Set, Tuple

from editor.mover import move_resources
from model.dependency import ResourceDependency
from model.errors import ConfigurationError
from model.report import RunReport
from model.resource_type import ALL_RESOURCE_TYPES, ResourceType
from scanner.resolver import resolve_module
from .config import DEFAULT_MAX_ROUNDS
from .progress import ProgressLogger, quiet

logger = logging.getLogger(__name__)


def check_max_rounds(max_rounds: int) -> None:
    if max_rounds < 1:
        raise ConfigurationError("max_rounds must be at least 1")


def move(
    source: Path,
    destinations: Iterable[Path],
    protected: Iterable[Path] = (),
    type_filter: AbstractSet[ResourceType] = ALL_RESOURCE_TYPES,
    max_rounds: int = DEFAULT_MAX_ROUNDS,
    progress: Optional[ProgressLogger] = None,
    source_extensions: Optional[Set[str]] = None,
) -> int:
    """Move resources and return how many were moved. See run_move."""
    return run_move(
        source=source,
        destinations=destinations,
        protected=protected,
        type_filter=type_filter,
        max_rounds=max_rounds,
        progress=progress,
        source_extensions=source_extensions,
    ).total


def run_move(
    source: Path,
    destinations: Iterable[Path],
    protected: Iterable[Path] = (),
    type_filter: AbstractSet[ResourceType] = ALL_RESOURCE_TYPES,
    max_rounds: int = DEFAULT_MAX_ROUNDS,
    progress: Optional[ProgressLogger] = None,
    source_extensions: Optional[Set[str]] = None,
) -> RunReport:
    """
    Move resources of the filtered types from ``source`` into the destinations.
    
    A resource is moved to a destination only when:
        - the destination references it
        - no other destination references it
        - neither the source nor any protected module references it
    
    Moving a resource can make a destination reference new resources; a
    moved layout brings along references to the drawables it uses. Rounds
    are therefore repeated, rescanning every module each time, until a
    round moves nothing or ``max_rounds`` productive rounds have run.
    
    Args:
        source: Module to move resources out of.
        destinations: Modules to move resources into. At least one.
        protected: Modules depending on the source whose references must
                   stay resolvable from the source.
        type_filter: Resource types that may be moved.
        max_rounds: Round cap.
        progress: Receiver of progress messages (default: silent).
        source_extensions: Source file extensions to scan for references.
    
    Returns:
        RunReport with per-round counts.
    
    Raises:
        ConfigurationError: No destinations or a bad round cap, before any I/O.
        ScanError, DocumentParseError: A file could not be read or parsed.
    """
    destinations = [Path(d) for d in destinations]
    protected = [Path(p) for p in protected]
    if not destinations:
        raise ConfigurationError("You must specify at least one output directory")
    check_max_rounds(max_rounds)
    
    if progress is None:
        progress = quiet()
    
    report = RunReport(
        operation="move",
        source=Path(source),
        destinations=destinations,
        protected=protected,
        max_rounds=max_rounds,
    )
    
    round_number = 1
    active = True
    while active:
        with progress.frame(f"Round #{round_number}") as depth:
            moved, per_module = _run_move_round(
                source=report.source,
                destinations=destinations,
                protected=protected,
                type_filter=type_filter,
                source_extensions=source_extensions,
                progress=progress,
                depth=depth,
            )
            report.add_round(moved, per_module)
            
            if moved > 0:
                progress.log(
                    f"Moved {progress.green(moved)} resource(s). Attempting another round of "
                    "extraction to see if new dependencies were introduced.",
                    depth,
                )
                round_number += 1
            else:
                progress.log("No resources were moved. Extraction is done.", depth)
                active = False
            
            if round_number > max_rounds:
                progress.log(
                    progress.red(f"Exceeded maximum moving rounds ({max_rounds}). Terminating moving."),
                    depth,
                )
                report.truncated = True
                active = False
    
    with progress.frame("Resource moving finished.") as depth:
        progress.log(f"{report.total} resource(s) moved over {report.rounds_run} round(s).", depth)
    
    logger.info("Move finished: %r", report)
    return report


def _resolve_blocked(
    source: Path,
    protected: List[Path],
    type_filter: AbstractSet[ResourceType],
    source_extensions: Optional[Set[str]],
) -> Set[ResourceDependency]:
    blocked = set(resolve_module(source, type_filter, source_extensions).dependencies)
    for module_root in protected:
        blocked |= resolve_module(module_root, type_filter, source_extensions).dependencies
    return blocked


def _run_move_round(
    source: Path,
    destinations: List[Path],
    protected: List[Path],
    type_filter: AbstractSet[ResourceType],
    source_extensions: Optional[Set[str]],
    progress: ProgressLogger,
    depth: int,
) -> Tuple[int, Dict[Path, int]]:
    blocked = _resolve_blocked(source, protected, type_filter, source_extensions)
    modules = [resolve_module(d, type_filter, source_extensions) for d in destinations]
    
    per_module: Dict[Path, int] = {}
    for index, module in enumerate(modules):
        wanted_elsewhere: Set[ResourceDependency] = set()
        for other_index, other in enumerate(modules):
            if other_index != index:
                wanted_elsewhere |= other.dependencies
        
        candidates = module.dependencies - blocked - wanted_elsewhere
        if not candidates:
            progress.log(f"{module.root}: {progress.yellow('No resources can be moved.')}", depth)
            per_module[module.root] = 0
            continue
        
        progress.log(
            f"{module.root}: Only {len(candidates)}/{len(module)} resource(s) referenced can be "
            "extracted due to other modules referencing them.",
            depth,
        )
        
        moved = move_resources(source, module.root, candidates)
        per_module[module.root] = moved
        
        if moved > 0:
            progress.log(f"{module.root}: {progress.green(f'Moved {moved} matching resource(s).')}", depth)
        else:
            progress.log(f"{module.root}: {progress.yellow('No resources were moved.')}", depth)
    
    return sum(per_module.values()), per_module
