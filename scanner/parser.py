"""Reference extraction rules for code and markup lines."""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Pattern, Set

from model.dependency import ResourceDependency
from model.errors import ScanError
from model.resource_type import ResourceType, classify


# Longest names first so "styleable" is not cut short by "style"
_TYPE_ALTERNATION = "|".join(
    sorted((re.escape(t.raw_name) for t in ResourceType), key=len, reverse=True)
)

CODE_USAGE_PATTERN = re.compile(rf"\b({_TYPE_ALTERNATION})\.(\w+)")
XML_USAGE_PATTERN = re.compile(r"@([A-Za-z]+)/([\w.]+)")
THEME_ATTR_PATTERN = re.compile(r"(?<![\w<])\?(android:)?(?:attr/)?([A-Za-z_]\w*)")
STYLE_PARENT_PATTERN = re.compile(r"parent\s*=\s*\"([\w.]+)\"")
DATABINDING_IMPORT_PATTERN = re.compile(r"databinding\.(\w+)")
CAPITAL_LETTER_PATTERN = re.compile(r"[A-Z]")

BINDING_SUFFIX = "Binding"


@dataclass(frozen=True)
class ExtractionRule:
    """
    One way a resource can be referenced.
    
    ``build`` turns a regex match into a dependency, or None to drop it.
    """
    name: str
    pattern: Pattern[str]
    build: Callable[["re.Match[str]"], Optional[ResourceDependency]]


def _typed_reference(match: "re.Match[str]") -> Optional[ResourceDependency]:
    resource_type = classify(match.group(1))
    if resource_type is None:
        return None
    return ResourceDependency.of(resource_type, match.group(2))


def _theme_attribute(match: "re.Match[str]") -> Optional[ResourceDependency]:
    # ?android:attr/... resolves against the framework
    if match.group(1):
        return None
    return ResourceDependency.of(ResourceType.ATTR, match.group(2))


def _style_parent(match: "re.Match[str]") -> Optional[ResourceDependency]:
    return ResourceDependency.of(ResourceType.STYLE, match.group(1))


def binding_class_to_layout_name(class_name: str) -> str:
    """
    Recover the layout name a generated binding class was created from.
    
    ``ActivityMainBinding`` -> ``activity_main``
    """
    if class_name.endswith(BINDING_SUFFIX):
        class_name = class_name[: -len(BINDING_SUFFIX)]
    
    def _snake(match: "re.Match[str]") -> str:
        letter = match.group(0).lower()
        return letter if match.start() == 0 else f"_{letter}"
    
    return CAPITAL_LETTER_PATTERN.sub(_snake, class_name)


def _data_binding(match: "re.Match[str]") -> Optional[ResourceDependency]:
    name = binding_class_to_layout_name(match.group(1))
    if not name:
        return None
    return ResourceDependency(type=ResourceType.LAYOUT, name=name)


EXTRACTION_RULES: List[ExtractionRule] = [
    ExtractionRule("code-usage", CODE_USAGE_PATTERN, _typed_reference),
    ExtractionRule("xml-usage", XML_USAGE_PATTERN, _typed_reference),
    ExtractionRule("style-parent", STYLE_PARENT_PATTERN, _style_parent),
    ExtractionRule("data-binding", DATABINDING_IMPORT_PATTERN, _data_binding),
    ExtractionRule("theme-attribute", THEME_ATTR_PATTERN, _theme_attribute),
]


def scan_line(line: str, rules: Optional[List[ExtractionRule]] = None) -> Set[ResourceDependency]:
    """
    Extract every resource reference on a single line.
    
    Args:
        line: A line of code or markup.
        rules: Extraction rules to apply (default: EXTRACTION_RULES).
    
    Returns:
        Set of dependencies found on the line.
    """
    if rules is None:
        rules = EXTRACTION_RULES
    
    dependencies: Set[ResourceDependency] = set()
    for rule in rules:
        for match in rule.pattern.finditer(line):
            dependency = rule.build(match)
            if dependency is not None:
                dependencies.add(dependency)
    return dependencies


def scan_file(file_path: Path, rules: Optional[List[ExtractionRule]] = None) -> Set[ResourceDependency]:
    """
    Extract every resource reference in a file.
    
    Bytes that are not valid UTF-8 are replaced, so the rest of the file
    still contributes its references.
    
    Raises:
        ScanError: If the file cannot be read.
    """
    try:
        content = file_path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise ScanError(file_path, str(e)) from e
    
    dependencies: Set[ResourceDependency] = set()
    for line in content.splitlines():
        dependencies.update(scan_line(line, rules))
    return dependencies
