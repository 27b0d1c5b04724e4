"""Run report model: what each round of a move or remove run achieved."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class RoundResult:
    """Outcome of a single round."""

    number: int
    count: int
    per_module: dict = field(default_factory=dict)  # module root -> count


@dataclass
class RunReport:
    """
    Outcome of a full move or remove run.

    ``truncated`` is set when the round cap was reached while rounds were
    still making progress; the tree is then valid but may not be converged.
    """

    operation: str
    source: Path
    destinations: List[Path] = field(default_factory=list)
    protected: List[Path] = field(default_factory=list)
    max_rounds: int = 10
    rounds: List[RoundResult] = field(default_factory=list)
    truncated: bool = False

    @property
    def total(self) -> int:
        return sum(r.count for r in self.rounds)

    @property
    def rounds_run(self) -> int:
        return len(self.rounds)

    @property
    def converged(self) -> bool:
        return not self.truncated and bool(self.rounds) and self.rounds[-1].count == 0

    def add_round(self, count: int, per_module: Optional[dict] = None) -> RoundResult:
        result = RoundResult(number=len(self.rounds) + 1, count=count, per_module=dict(per_module or {}))
        self.rounds.append(result)
        return result

    def __repr__(self) -> str:
        return (
            f"RunReport(operation={self.operation!r}, total={self.total}, "
            f"rounds={self.rounds_run}, truncated={self.truncated})"
        )
