"""Resource dependency values and per-round module snapshots."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet

from .resource_type import ResourceType


def normalize_name(name: str) -> str:
    """Dots in markup names become underscores, matching the generated R fields."""
    return name.replace(".", "_")


@dataclass(frozen=True)
class ResourceDependency:
    """A reference to the resource ``type/name``."""

    type: ResourceType
    name: str

    @classmethod
    def of(cls, resource_type: ResourceType, name: str) -> "ResourceDependency":
        return cls(type=resource_type, name=normalize_name(name))

    def __str__(self) -> str:
        return f"{self.type.raw_name}/{self.name}"


@dataclass(frozen=True)
class ModuleInfo:
    """
    A module directory together with the resources it referenced when scanned.

    Snapshots are only valid for the round they were computed in; edits made
    during a round change what the module references.
    """

    root: Path
    dependencies: FrozenSet[ResourceDependency] = field(default_factory=frozenset)

    @property
    def names(self) -> FrozenSet[str]:
        return frozenset(dependency.name for dependency in self.dependencies)

    def __len__(self) -> int:
        return len(self.dependencies)
