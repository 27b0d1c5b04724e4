"""Tests for the resource document model."""

import pytest

from editor.document import (
    NodeKind,
    detach,
    element_key,
    element_name,
    empty_container,
    is_comment,
    is_whitespace,
    line_ending,
    parse_document,
    text_node,
    trim_end,
    trim_start,
    with_line_ending,
)
from editor.escapes import ESCAPE_SEQUENCE_MARKER, protect_escapes, restore_escapes
from model.dependency import ResourceDependency
from model.errors import DocumentParseError
from model.resource_type import ResourceType


STRINGS = (
    '<?xml version="1.0" encoding="utf-8"?>\n'
    "<!-- Copyright header -->\n"
    "<resources>\n"
    '    <string name="first">First</string>\n'
    "    <!-- Shown on the second screen -->\n"
    '    <string name="second">Second</string>\n'
    '    <string name="third">Don\'t &amp; stop</string>\n'
    "</resources>\n"
)


class TestParsing:
    """Tests for splitting documents into nodes."""
    
    def test_round_trip(self):
        """Test that an unedited document serializes to identical text."""
        text = protect_escapes(STRINGS)
        document = parse_document(text)
        
        assert document.serialize() == text
        assert restore_escapes(document.serialize()) == STRINGS
    
    def test_container_detection(self):
        """Test that only <resources> roots are containers."""
        assert parse_document(STRINGS).is_container
        assert not parse_document('<vector android:width="24dp" xmlns:android="x"/>').is_container
    
    def test_children(self):
        """Test the node sequence under the root."""
        document = parse_document(protect_escapes(STRINGS))
        kinds = [node.kind for node in document.children]
        
        assert kinds == [
            NodeKind.TEXT, NodeKind.ELEMENT,
            NodeKind.TEXT, NodeKind.COMMENT,
            NodeKind.TEXT, NodeKind.ELEMENT,
            NodeKind.TEXT, NodeKind.ELEMENT,
            NodeKind.TEXT,
        ]
        assert [element_name(e) for e in document.elements] == ["first", "second", "third"]
    
    def test_prolog_comment_is_not_a_child(self):
        """Test that comments before the root stay in the prolog."""
        document = parse_document(STRINGS)
        assert "<!-- Copyright header -->" in document.prolog
        assert document.prolog.endswith("<resources>")
        assert document.epilog == "</resources>\n"
    
    def test_nested_elements(self):
        """Test that nested content belongs to its top-level element."""
        text = (
            "<resources>\n"
            '    <style name="Theme.App" parent="Base">\n'
            '        <item name="colorPrimary">@color/blue</item>\n'
            "        <!-- inner -->\n"
            "    </style>\n"
            "</resources>"
        )
        document = parse_document(text)
        
        assert len(document.elements) == 1
        style = document.elements[0]
        assert style.raw.startswith('<style name="Theme.App"')
        assert style.raw.endswith("</style>")
        assert element_key(style) == ResourceDependency(type=ResourceType.STYLE, name="Theme_App")
    
    def test_attributes_with_angle_brackets(self):
        """Test attribute values containing '>'."""
        document = parse_document('<resources><string name="a" hint="x>y">A</string></resources>')
        assert element_name(document.elements[0]) == "a"
    
    def test_self_closing_root(self):
        """Test that an empty <resources/> can receive children."""
        document = parse_document("<resources/>\n")
        assert document.children == []
        assert document.serialize() == "<resources/>\n"
        
        document.children.append(text_node("\n    "))
        document.children.extend(parse_document('<resources><bool name="b">true</bool></resources>').elements)
        document.children.append(text_node("\n"))
        
        assert document.serialize() == '<resources>\n    <bool name="b">true</bool>\n</resources>\n'
    
    def test_malformed_raises(self):
        """Test that malformed markup is fatal."""
        with pytest.raises(DocumentParseError):
            parse_document('<resources><string name="a">A</resources>')
    
    def test_unprotected_entity_raises(self):
        """Test that undeclared entities need protection to parse."""
        text = '<resources><string name="a">A&nbsp;B</string></resources>'
        with pytest.raises(DocumentParseError):
            parse_document(text)
        assert parse_document(protect_escapes(text)).is_container
    
    def test_empty_container(self):
        """Test the synthesized destination document."""
        document = empty_container()
        assert document.is_container
        assert document.elements == []
        assert 'xmlns:tools="http://schemas.android.com/tools"' in document.prolog


class TestDetach:
    """Tests for detaching elements with their formatting."""
    
    def test_detach_with_comment(self):
        """Test that a leading comment and its indentation go with the element."""
        document = parse_document(STRINGS)
        second = document.elements[1]
        
        detached = detach(document.children, second)
        
        assert [n.kind for n in detached] == [NodeKind.TEXT, NodeKind.COMMENT, NodeKind.TEXT, NodeKind.ELEMENT]
        assert detached[-1] is second
        assert document.serialize() == (
            '<?xml version="1.0" encoding="utf-8"?>\n'
            "<!-- Copyright header -->\n"
            "<resources>\n"
            '    <string name="first">First</string>\n'
            '    <string name="third">Don\'t &amp; stop</string>\n'
            "</resources>\n"
        )
    
    def test_detach_without_comment(self):
        """Test that only the indentation goes when there is no comment."""
        document = parse_document(STRINGS)
        third = document.elements[2]
        
        detached = detach(document.children, third)
        
        assert [n.kind for n in detached] == [NodeKind.TEXT, NodeKind.ELEMENT]
        assert "Shown on the second screen" in document.serialize()
        assert "third" not in document.serialize()
    
    def test_detach_first_element(self):
        """Test detaching the first element keeps siblings indented."""
        document = parse_document(STRINGS)
        detach(document.children, document.elements[0])
        
        assert document.serialize().count("\n    <string") == 2
        assert "first" not in document.serialize()
    
    def test_comment_needs_whitespace_between(self):
        """Test that a comment directly touching the element is not taken."""
        document = parse_document("<resources>\n    <!-- c --><string name=\"a\">A</string>\n</resources>")
        detached = detach(document.children, document.elements[0])
        
        assert len(detached) == 1
        assert "<!-- c -->" in document.serialize()
    
    def test_siblings_untouched(self):
        """Test that sibling elements keep their exact text."""
        document = parse_document(STRINGS)
        before = [e.raw for e in document.elements]
        
        detach(document.children, document.elements[1])
        
        assert [e.raw for e in document.elements] == [before[0], before[2]]


class TestTrim:
    """Tests for whitespace normalization at the document edges."""
    
    def test_trim_start(self):
        """Test that leading whitespace collapses to one indentation node."""
        children = [text_node("\n"), text_node("\n\n  ")] + parse_document(STRINGS).elements[:1]
        trim_start(children)
        
        assert len(children) == 2
        assert children[0].raw == "\n    "
    
    def test_trim_end(self):
        """Test that trailing whitespace nodes are dropped."""
        children = parse_document(STRINGS).elements[:1] + [text_node("\n"), text_node("  ")]
        trim_end(children)
        
        assert len(children) == 1
    
    def test_node_predicates(self):
        """Test whitespace and comment detection."""
        document = parse_document(STRINGS)
        assert is_whitespace(document.children[0])
        assert is_comment(document.children[3])
        assert not is_whitespace(document.children[1])
        assert not is_whitespace(None)


class TestEscapes:
    """Tests for escape sequence protection."""
    
    def test_protect_and_restore(self):
        """Test that restoring a protected text gives the original."""
        text = "Don&apos;t &amp; &#8230; &#x2026; & plain"
        protected = protect_escapes(text)
        
        assert "&apos;" not in protected
        assert ESCAPE_SEQUENCE_MARKER + "apos;" in protected
        assert protected.endswith("& plain")
        assert restore_escapes(protected) == text


class TestLineEndings:
    """Tests for keeping a document's line endings."""
    
    def test_line_ending_detection(self):
        """Test that the separator whitespace decides the line ending."""
        crlf = parse_document('<resources>\r\n    <bool name="on">true</bool>\r\n</resources>\r\n')
        
        assert line_ending(crlf.children) == "\r\n"
        assert line_ending(parse_document(STRINGS).children) == "\n"
        assert line_ending([]) == "\n"
    
    def test_with_line_ending(self):
        """Test that only whitespace nodes are rewritten."""
        element = parse_document(STRINGS).elements[0]
        
        assert with_line_ending(text_node("\n    "), "\r\n").raw == "\r\n    "
        assert with_line_ending(text_node("\r\n"), "\n").raw == "\n"
        assert with_line_ending(element, "\r\n") is element
