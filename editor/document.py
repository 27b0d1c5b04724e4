"""
Formatting-preserving model of resource documents.

A document is split into the text before the root's children (``prolog``,
ending with the root start tag), the root's children as an ordered list of
nodes, and the text from the root end tag onwards (``epilog``). Every node
keeps its raw source text, so serializing an unedited document gives back
exactly the text it was parsed from. Edits are list operations on
``children``.
"""

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from model.dependency import ResourceDependency, normalize_name
from model.errors import DocumentParseError
from model.resource_type import ResourceType, classify_element


CONTAINER_ROOT_TAG = "resources"
DEFAULT_INDENTATION = " " * 4

EMPTY_RESOURCES_DOCUMENT = (
    '<?xml version="1.0" encoding="utf-8"?>\n'
    '<resources xmlns:tools="http://schemas.android.com/tools">\n'
    "</resources>\n"
)

_TOKEN_PATTERN = re.compile(
    r"<!--.*?-->"
    r"|<!\[CDATA\[.*?\]\]>"
    r"|<\?.*?\?>"
    r"|<!(?:[^>\[]|\[[^\]]*\])*>"
    r"|<(?:[^>\"']|\"[^\"]*\"|'[^']*')*>"
    r"|[^<]+",
    re.DOTALL,
)
_TAG_NAME_PATTERN = re.compile(r"</?\s*([^\s/>]+)")
_ATTRIBUTE_PATTERN = re.compile(r"([^\s=/<>]+)\s*=\s*(?:\"([^\"]*)\"|'([^']*)')")


class NodeKind(Enum):
    ELEMENT = "element"
    COMMENT = "comment"
    TEXT = "text"
    OTHER = "other"  # processing instructions, CDATA


@dataclass(eq=False)
class Node:
    """A direct child of the document root. Compared by identity."""
    kind: NodeKind
    raw: str
    tag: Optional[str] = None
    attributes: Dict[str, str] = field(default_factory=dict)


@dataclass
class ResourceDocument:
    prolog: str
    root_tag: str
    children: List[Node]
    epilog: str
    self_closing_root: bool = False

    @property
    def is_container(self) -> bool:
        """True for values-style documents holding many resources."""
        return self.root_tag == CONTAINER_ROOT_TAG

    @property
    def elements(self) -> List[Node]:
        return [node for node in self.children if node.kind is NodeKind.ELEMENT]

    def serialize(self) -> str:
        body = "".join(node.raw for node in self.children)
        if self.self_closing_root and self.children:
            # <resources/> has to be opened up to receive children
            opening = re.sub(r"\s*/>$", ">", self.prolog)
            return f"{opening}{body}</{self.root_tag}>{self.epilog}"
        return f"{self.prolog}{body}{self.epilog}"


def text_node(text: str) -> Node:
    return Node(kind=NodeKind.TEXT, raw=text)


def is_whitespace(node: Optional[Node]) -> bool:
    return node is not None and node.kind is NodeKind.TEXT and not node.raw.strip()


def line_ending(children: List[Node]) -> str:
    """Line ending used by the whitespace between children, LF if there is none."""
    for node in children:
        if is_whitespace(node) and "\n" in node.raw:
            return "\r\n" if "\r\n" in node.raw else "\n"
    return "\n"


def with_line_ending(node: Node, newline: str) -> Node:
    """Rewrite the line breaks of a whitespace node, other nodes are returned as is."""
    if not is_whitespace(node):
        return node
    return text_node(node.raw.replace("\r\n", "\n").replace("\n", newline))


def is_comment(node: Optional[Node]) -> bool:
    return node is not None and node.kind is NodeKind.COMMENT


def raw_element_name(node: Node) -> Optional[str]:
    return node.attributes.get("name")


def element_name(node: Node) -> Optional[str]:
    """Resource name of an element, normalized the way references are."""
    name = raw_element_name(node)
    return normalize_name(name) if name is not None else None


def element_type(node: Node) -> Optional[ResourceType]:
    return classify_element(node.tag, node.attributes)


def element_key(node: Node) -> Optional[ResourceDependency]:
    """The (type, name) identity of a resource element, if it has one."""
    resource_type = element_type(node)
    name = element_name(node)
    if resource_type is None or name is None:
        return None
    return ResourceDependency(type=resource_type, name=name)


def _tag_name(token: str) -> str:
    match = _TAG_NAME_PATTERN.match(token)
    return match.group(1) if match else ""


def _attributes(token: str) -> Dict[str, str]:
    attributes = {}
    # Skip the tag name so it is never read as an attribute
    start = _TAG_NAME_PATTERN.match(token)
    for match in _ATTRIBUTE_PATTERN.finditer(token, start.end() if start else 0):
        value = match.group(2) if match.group(2) is not None else match.group(3)
        attributes[match.group(1)] = value
    return attributes


def _is_start_tag(token: str) -> bool:
    return token.startswith("<") and not token.startswith(("</", "<!", "<?"))


def _is_end_tag(token: str) -> bool:
    return token.startswith("</")


def _is_self_closing(token: str) -> bool:
    return token.endswith("/>")


def _tokenize(text: str, path: Optional[Path]) -> List[str]:
    tokens = []
    position = 0
    for match in _TOKEN_PATTERN.finditer(text):
        if match.start() != position:
            raise DocumentParseError(path, f"unexpected markup at offset {position}")
        tokens.append(match.group(0))
        position = match.end()
    if position != len(text):
        raise DocumentParseError(path, f"unexpected markup at offset {position}")
    return tokens


def parse_document(text: str, path: Optional[Path] = None) -> ResourceDocument:
    """
    Parse resource markup into a ResourceDocument.

    The text must already have its escape sequences protected.

    Raises:
        DocumentParseError: If the text is not well-formed.
    """
    try:
        ET.fromstring(text.lstrip("\ufeff"))
    except ET.ParseError as e:
        raise DocumentParseError(path, str(e)) from e

    tokens = _tokenize(text, path)

    index = 0
    while not _is_start_tag(tokens[index]):
        index += 1
    root_token = tokens[index]
    root_tag = _tag_name(root_token)
    prolog = "".join(tokens[: index + 1])
    index += 1

    if _is_self_closing(root_token):
        return ResourceDocument(
            prolog=prolog,
            root_tag=root_tag,
            children=[],
            epilog="".join(tokens[index:]),
            self_closing_root=True,
        )

    children: List[Node] = []
    element_tokens: List[str] = []
    depth = 0

    while index < len(tokens):
        token = tokens[index]

        if element_tokens:
            element_tokens.append(token)
            if _is_start_tag(token) and not _is_self_closing(token):
                depth += 1
            elif _is_end_tag(token):
                depth -= 1
                if depth == 0:
                    children.append(_element_node(element_tokens))
                    element_tokens = []
        elif _is_end_tag(token):
            break
        elif _is_start_tag(token):
            element_tokens = [token]
            depth = 1
            if _is_self_closing(token):
                children.append(_element_node(element_tokens))
                element_tokens = []
                depth = 0
        elif token.startswith("<!--"):
            children.append(Node(kind=NodeKind.COMMENT, raw=token))
        elif token.startswith("<"):
            children.append(Node(kind=NodeKind.OTHER, raw=token))
        else:
            children.append(text_node(token))
        index += 1

    return ResourceDocument(
        prolog=prolog,
        root_tag=root_tag,
        children=children,
        epilog="".join(tokens[index:]),
    )


def _element_node(tokens: List[str]) -> Node:
    start = tokens[0]
    return Node(
        kind=NodeKind.ELEMENT,
        raw="".join(tokens),
        tag=_tag_name(start),
        attributes=_attributes(start),
    )


def empty_container() -> ResourceDocument:
    return parse_document(EMPTY_RESOURCES_DOCUMENT)


def _index_of(children: List[Node], node: Node) -> int:
    for index, child in enumerate(children):
        if child is node:
            return index
    raise ValueError("node is not a child of this document")


def detach(children: List[Node], node: Node) -> List[Node]:
    """
    Remove an element and the formatting that belongs to it.

    Given children laid out as::

        TEXT "\\n    "
        COMMENT "<!-- This is a comment -->"
        TEXT "\\n    "
        ELEMENT <string name="test">Test</string>

    detaching the element also takes the indentation in front of it, so the
    remaining siblings stay indented. When that indentation follows a
    comment, the comment and its own indentation are taken too, since the
    comment annotates the element.

    Returns:
        The detached nodes in their original order.
    """
    index = _index_of(children, node)
    start = index

    if start > 0 and is_whitespace(children[start - 1]):
        start -= 1
        if start > 0 and is_comment(children[start - 1]):
            start -= 1
            if start > 0 and is_whitespace(children[start - 1]):
                start -= 1

    detached = children[start: index + 1]
    del children[start: index + 1]
    return detached


def trim_start(
    children: List[Node],
    indentation: str = DEFAULT_INDENTATION,
    newline: str = "\n",
) -> None:
    """Coalesce leading whitespace nodes into a single indentation node."""
    while children and is_whitespace(children[0]):
        del children[0]
    children.insert(0, text_node(f"{newline}{indentation}"))


def trim_end(children: List[Node]) -> None:
    """Drop trailing whitespace nodes."""
    while children and is_whitespace(children[-1]):
        del children[-1]
