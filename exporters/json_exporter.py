"""JSON exporter for run reports (machine-friendly format)."""

import json
from pathlib import Path
from typing import Optional, Dict, List, Any

from model.report import RunReport


def to_json(
    report: RunReport,
    root: Optional[Path] = None,
    indent: int = 2,
) -> str:
    """
    Convert a run report to JSON format.
    
    Args:
        report: The report of a move or remove run.
        root: Optional base path for relative module paths.
        indent: JSON indentation level.
    
    Returns:
        JSON string representation of the report.
    """
    rounds: List[Dict[str, Any]] = []
    for result in report.rounds:
        modules = {
            _get_path_str(module, root): count
            for module, count in sorted(result.per_module.items(), key=lambda item: str(item[0]))
        }
        rounds.append({"round": result.number, "count": result.count, "modules": modules})
    
    data: Dict[str, Any] = {
        "operation": report.operation,
        "source": _get_path_str(report.source, root),
        "destinations": [_get_path_str(d, root) for d in report.destinations],
        "protected": [_get_path_str(p, root) for p in report.protected],
        "max_rounds": report.max_rounds,
        "rounds": rounds,
        "total": report.total,
        "converged": report.converged,
        "truncated": report.truncated,
    }
    
    return json.dumps(data, indent=indent)


def _get_path_str(path: Path, root: Optional[Path]) -> str:
    """Get the string representation of a path."""
    path = Path(path)
    if root is not None:
        try:
            rel_path = path.resolve().relative_to(root.resolve())
            return str(rel_path).replace("\\", "/")
        except ValueError:
            pass
    return str(path).replace("\\", "/")
