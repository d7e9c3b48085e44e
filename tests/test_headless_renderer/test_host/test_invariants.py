"""Tests for the instance tree invariant check."""

import pytest

from headless_renderer.host.instances import ContainerInfo, ElementInstance, TextInstance
from headless_renderer.host.invariants import verify_tree
from headless_renderer.shared.exceptions import InvariantViolation


class TestVerifyTree:
    """Test suite for verify_tree."""

    def test_valid_tree(self):
        """Test a well-formed tree passes and every instance is counted."""
        info = ContainerInfo()
        box = ElementInstance(type="box")
        box.children.extend([TextInstance("a"), ElementInstance(type="leaf")])
        info.children.extend([box, TextInstance("b")])

        assert verify_tree(info) == 4

    def test_empty_tree(self):
        """Test an empty container passes."""
        assert verify_tree(ContainerInfo()) == 0

    def test_duplicate_child(self):
        """Test a child listed twice in one parent is reported."""
        info = ContainerInfo()
        text = TextInstance("a")
        info.children.extend([text, text])

        with pytest.raises(InvariantViolation, match="appears twice") as exc_info:
            verify_tree(info)

        assert exc_info.value.operation == "verify_tree"

    def test_shared_child(self):
        """Test a child reachable from two parents is reported."""
        info = ContainerInfo()
        shared = TextInstance("a")
        first = ElementInstance(type="box")
        second = ElementInstance(type="box")
        first.children.append(shared)
        second.children.append(shared)
        info.children.extend([first, second])

        with pytest.raises(InvariantViolation, match="more than one parent"):
            verify_tree(info)

    def test_children_prop(self):
        """Test an instance storing a children prop is reported."""
        info = ContainerInfo()
        box = ElementInstance(type="box")
        box.props["children"] = ()
        info.children.append(box)

        with pytest.raises(InvariantViolation, match="children property"):
            verify_tree(info)

    def test_non_string_text(self):
        """Test a text instance holding a non-string is reported."""
        info = ContainerInfo()
        text = TextInstance("a")
        text.text = 5  # type: ignore
        info.children.append(text)

        with pytest.raises(InvariantViolation, match="Unexpected node"):
            verify_tree(info)

    def test_foreign_node(self):
        """Test a node of neither variant is reported."""
        info = ContainerInfo()
        info.children.append("not an instance")

        with pytest.raises(InvariantViolation, match="Unexpected node"):
            verify_tree(info)
