"""Tests for the in-memory instance model."""

import pytest

from headless_renderer.host.instances import (
    CONTAINER_TAG,
    ContainerInfo,
    ElementInstance,
    TextInstance,
    create_instance,
    create_text_instance,
    get_public_instance,
    props_without_children,
)


class TestElementInstance:
    """Test suite for ElementInstance."""

    def test_create_instance_drops_children(self):
        """Test created instances never store a children prop."""
        instance = create_instance("box", {"id": 1, "children": ("a",)}, None, None)

        assert isinstance(instance, ElementInstance)
        assert instance.type == "box"
        assert instance.props == {"id": 1}
        assert instance.children == []

    def test_create_instance_without_props(self):
        """Test missing props produce an empty mapping."""
        assert create_instance("box", None).props == {}

    def test_create_instance_copies_props(self):
        """Test the instance does not share the caller's mapping."""
        props = {"id": 1}
        instance = create_instance("box", props)
        props["id"] = 2

        assert instance.props == {"id": 1}

    def test_identity_equality(self):
        """Test instances with equal content are still distinct nodes."""
        first = ElementInstance(type="box")
        second = ElementInstance(type="box")

        assert first != second
        assert first == first

    def test_invalid_instances_rejected(self):
        """Test construction-time validation."""
        with pytest.raises(ValueError, match="type cannot be empty"):
            ElementInstance(type="")
        with pytest.raises(ValueError, match="cannot contain 'children'"):
            ElementInstance(type="box", props={"children": ()})


class TestTextInstance:
    """Test suite for TextInstance."""

    def test_create_text_instance(self):
        """Test text instances hold the given text."""
        text = create_text_instance("hello", None, None)

        assert isinstance(text, TextInstance)
        assert text.text == "hello"

    def test_non_string_rejected(self):
        """Test text content must be a string."""
        with pytest.raises(TypeError, match="must be a string"):
            TextInstance(text=5)  # type: ignore

    def test_identity_equality(self):
        """Test equal text instances are still distinct nodes."""
        assert TextInstance("a") != TextInstance("a")


class TestContainerInfo:
    """Test suite for ContainerInfo."""

    def test_new_container_is_empty(self):
        """Test a new root record has no children and the expected tag."""
        info = ContainerInfo()

        assert info.children == []
        assert info.is_empty is True
        assert info.tag == CONTAINER_TAG == "RootContainerInfoInstance"

    def test_containers_do_not_share_children(self):
        """Test each root record owns its own child list."""
        first = ContainerInfo()
        second = ContainerInfo()
        first.children.append(TextInstance("a"))

        assert second.is_empty is True


class TestHelpers:
    """Test suite for small instance helpers."""

    def test_props_without_children(self):
        """Test only the children entry is dropped."""
        assert props_without_children({"a": 1, "children": ()}) == {"a": 1}
        assert props_without_children(None) == {}
        assert props_without_children({}) == {}

    def test_get_public_instance_is_identity(self):
        """Test callers receive the instance itself."""
        instance = ElementInstance(type="box")

        assert get_public_instance(instance) is instance
