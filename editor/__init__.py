"""Document editing: moving and deleting resource definitions in place."""

from .document import ResourceDocument, Node, NodeKind, parse_document, detach
from .escapes import protect_escapes, restore_escapes
from .mover import apply_move, move_resources
from .remover import apply_remove, remove_resources

__all__ = [
    "ResourceDocument",
    "Node",
    "NodeKind",
    "parse_document",
    "detach",
    "protect_escapes",
    "restore_escapes",
    "apply_move",
    "move_resources",
    "apply_remove",
    "remove_resources",
]
