"""Tests for resource type classification."""

import pytest
from pathlib import Path

from model.errors import ConfigurationError
from model.resource_type import (
    ALL_RESOURCE_TYPES,
    ResourceType,
    classify,
    classify_directory,
    classify_element,
    derive_type_filter,
    resource_type_of_path,
    type_to_raw_name,
)
from model.dependency import ResourceDependency


class TestClassify:
    """Tests for raw name lookup."""
    
    def test_known_names(self):
        """Test that every raw name maps back to its type."""
        for resource_type in ResourceType:
            assert classify(type_to_raw_name(resource_type)) is resource_type
    
    def test_unknown_names(self):
        """Test that unknown tokens have no type."""
        assert classify("values") is None
        assert classify("resources") is None
        assert classify("") is None
        assert classify(None) is None
    
    def test_animation_raw_name(self):
        """Test that the animation type uses the directory spelling."""
        assert classify("anim") is ResourceType.ANIMATION
        assert ResourceType.ANIMATION.raw_name == "anim"


class TestDirectoryClassification:
    """Tests for classifying resource directories and files."""
    
    def test_qualifiers_are_stripped(self):
        """Test that qualifier suffixes do not affect the type."""
        assert classify_directory("drawable") is ResourceType.DRAWABLE
        assert classify_directory("drawable-hdpi") is ResourceType.DRAWABLE
        assert classify_directory("layout-land-v21") is ResourceType.LAYOUT
    
    def test_values_directories_have_no_type(self):
        """Test that values directories are containers, not a type."""
        assert classify_directory("values") is None
        assert classify_directory("values-night") is None
    
    def test_type_of_path(self):
        """Test typing a standalone resource file by its directory."""
        path = Path("src/main/res/anim/slide_in_from_top.xml")
        assert resource_type_of_path(path) is ResourceType.ANIMATION


class TestElementClassification:
    """Tests for classifying children of container documents."""
    
    def test_plain_tags(self):
        """Test tags that spell their type."""
        assert classify_element("string", {"name": "a"}) is ResourceType.STRING
        assert classify_element("style", {"name": "A.B"}) is ResourceType.STYLE
    
    def test_aliases(self):
        """Test array and styleable definitions."""
        assert classify_element("string-array") is ResourceType.ARRAY
        assert classify_element("integer-array") is ResourceType.ARRAY
        assert classify_element("declare-styleable") is ResourceType.STYLEABLE
    
    def test_item_with_type(self):
        """Test that <item type="..."> takes its type from the attribute."""
        assert classify_element("item", {"name": "x", "type": "dimen"}) is ResourceType.DIMEN
        assert classify_element("item", {"name": "x"}) is None
    
    def test_unknown_tag(self):
        """Test that unknown tags have no type."""
        assert classify_element("eat-comment") is None
        assert classify_element(None) is None


class TestTypeFilter:
    """Tests for include/exclude type filter derivation."""
    
    def test_include(self):
        """Test that an include list is used as-is."""
        assert derive_type_filter([ResourceType.STRING], []) == {ResourceType.STRING}
    
    def test_exclude(self):
        """Test that an exclude list is subtracted from all types."""
        result = derive_type_filter([], [ResourceType.ID])
        assert ResourceType.ID not in result
        assert result == ALL_RESOURCE_TYPES - {ResourceType.ID}
    
    def test_neither(self):
        """Test that no lists means every type."""
        assert derive_type_filter() == ALL_RESOURCE_TYPES
    
    def test_both_is_an_error(self):
        """Test that giving both lists is rejected."""
        with pytest.raises(ConfigurationError):
            derive_type_filter([ResourceType.STRING], [ResourceType.ID])


class TestResourceDependency:
    """Tests for dependency values."""
    
    def test_dots_are_normalized(self):
        """Test that dotted names compare equal to underscored ones."""
        a = ResourceDependency.of(ResourceType.STYLE, "Widget.Button")
        b = ResourceDependency(type=ResourceType.STYLE, name="Widget_Button")
        assert a == b
        assert len({a, b}) == 1
    
    def test_type_is_part_of_identity(self):
        """Test that same-named resources of different types differ."""
        a = ResourceDependency(type=ResourceType.STRING, name="title")
        b = ResourceDependency(type=ResourceType.DIMEN, name="title")
        assert a != b
    
    def test_str(self):
        """Test the readable form."""
        assert str(ResourceDependency(type=ResourceType.DRAWABLE, name="ic")) == "drawable/ic"
