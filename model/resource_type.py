"""Resource type catalogue and classification helpers."""

from enum import Enum
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, Mapping, Optional

from .errors import ConfigurationError


class ResourceType(Enum):
    """
    Android resource categories.

    The value of each member is its raw name, which doubles as the XML tag
    of values-style definitions, the token used in ``R.<type>.<name>`` and
    ``@<type>/<name>`` references, and the resource directory name.
    """

    ANIMATION = "anim"
    ANIMATOR = "animator"
    ARRAY = "array"
    ATTR = "attr"
    BOOL = "bool"
    COLOR = "color"
    DIMEN = "dimen"
    DRAWABLE = "drawable"
    FONT = "font"
    FRACTION = "fraction"
    ID = "id"
    INTEGER = "integer"
    INTERPOLATOR = "interpolator"
    LAYOUT = "layout"
    MENU = "menu"
    MIPMAP = "mipmap"
    NAVIGATION = "navigation"
    PLURALS = "plurals"
    RAW = "raw"
    STRING = "string"
    STYLE = "style"
    STYLEABLE = "styleable"
    TRANSITION = "transition"
    XML = "xml"

    @property
    def raw_name(self) -> str:
        return self.value


_BY_RAW_NAME: Dict[str, ResourceType] = {t.raw_name: t for t in ResourceType}

# Tags of values-style definitions that do not spell their type directly
_ELEMENT_ALIASES: Dict[str, ResourceType] = {
    "string-array": ResourceType.ARRAY,
    "integer-array": ResourceType.ARRAY,
    "declare-styleable": ResourceType.STYLEABLE,
}

ALL_RESOURCE_TYPES: FrozenSet[ResourceType] = frozenset(ResourceType)


def classify(token: Optional[str]) -> Optional[ResourceType]:
    """Map a raw name to its resource type, or None when it is not one."""
    if not token:
        return None
    return _BY_RAW_NAME.get(token)


def type_to_raw_name(resource_type: ResourceType) -> str:
    return resource_type.raw_name


def classify_directory(name: str) -> Optional[ResourceType]:
    """
    Classify a resource directory name.

    Qualifiers are stripped first, so ``drawable-hdpi`` and ``drawable``
    both classify as a drawable while ``values-night`` has no type.
    """
    return classify(name.split("-", 1)[0])


def classify_element(tag: Optional[str], attributes: Optional[Mapping[str, str]] = None) -> Optional[ResourceType]:
    """
    Classify a child element of a container document by its tag.

    ``<item type="dimen" .../>`` definitions take their type from the
    ``type`` attribute.
    """
    if not tag:
        return None
    if tag == "item" and attributes:
        return classify(attributes.get("type"))
    return _ELEMENT_ALIASES.get(tag) or classify(tag)


def resource_type_of_path(path: Path) -> Optional[ResourceType]:
    """
    Resource type of a standalone resource file from its directory.

    Example: src/main/res/anim/slide_in_from_top.xml is an animation.
    """
    return classify_directory(path.parent.name)


def derive_type_filter(
    include: Optional[Iterable[ResourceType]] = None,
    exclude: Optional[Iterable[ResourceType]] = None,
) -> FrozenSet[ResourceType]:
    """
    Build the set of resource types an operation may touch.

    Args:
        include: Types to operate on. Used as-is when non-empty.
        exclude: Types to leave alone; every other type is included.

    Returns:
        The resulting type filter.

    Raises:
        ConfigurationError: If both lists are given.
    """
    include_set = frozenset(include or ())
    exclude_set = frozenset(exclude or ())

    if include_set and exclude_set:
        raise ConfigurationError("Cannot specify both resources to include and resources to exclude")

    if include_set:
        return include_set
    return ALL_RESOURCE_TYPES - exclude_set
