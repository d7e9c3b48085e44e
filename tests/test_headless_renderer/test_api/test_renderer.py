"""Tests for the container lifecycle API with progressive disclosure.

Covers the module-level functions backed by the default renderer and the
configurable HeadlessRenderer class.
"""

import asyncio
import logging
from unittest.mock import Mock

import pytest

from headless_renderer import (
    HeadlessRenderer,
    InvariantViolation,
    RendererConfig,
    ValidationError,
    container_to_elements,
    create_container,
    create_element,
    render_to_container,
    unmount_at_container,
)
from headless_renderer.api import get_default_renderer
from headless_renderer.host.host_config import HostConfig
from headless_renderer.host.instances import ElementInstance, TextInstance
from headless_renderer.host.mutation import remove_child
from headless_renderer.reconciler import Container


class TestSimpleFunctions:
    """Test Level 1: module-level container functions."""

    def test_new_container_is_empty(self):
        """Test a fresh container reads back as an empty list."""
        container = create_container()

        assert isinstance(container, Container)
        assert container_to_elements(container) == []
        assert container.container_info.tag == "RootContainerInfoInstance"

    def test_round_trip(self):
        """Test rendered trees read back as equal elements."""
        tree = create_element(
            "screen", {"title": "Home"},
            create_element("row", {"gap": 2}, "left", create_element("spacer")),
            "footer",
        )
        container = create_container()
        render_to_container(container, tree)

        assert container_to_elements(container) == [tree]

    def test_round_trip_top_level_list(self):
        """Test several top-level nodes read back in order."""
        container = create_container()
        render_to_container(container, ["a", create_element("b", {"x": 1}), "c"])

        assert container_to_elements(container) == ["a", create_element("b", {"x": 1}), "c"]

    def test_render_none(self):
        """Test rendering None leaves the container empty."""
        container = create_container()
        render_to_container(container, None)

        assert container_to_elements(container) == []

    def test_unmount(self):
        """Test unmounting empties the container."""
        container = create_container()
        render_to_container(container, create_element("box", None, "x"))
        unmount_at_container(container)

        assert container_to_elements(container) == []
        assert container.container_info.is_empty

    def test_rerender_after_unmount(self):
        """Test a container can be rendered into again after unmounting."""
        container = create_container()
        render_to_container(container, "first")
        unmount_at_container(container)
        render_to_container(container, "second")

        assert container_to_elements(container) == ["second"]

    def test_containers_are_independent(self):
        """Test rendering into one container leaves others untouched."""
        first = create_container()
        second = create_container()
        render_to_container(first, "a")
        render_to_container(second, "b")
        unmount_at_container(first)

        assert container_to_elements(first) == []
        assert container_to_elements(second) == ["b"]

    def test_callback(self):
        """Test the callback runs once with no arguments after the commit."""
        container = create_container()
        callback = Mock()
        render_to_container(container, "x", callback)

        callback.assert_called_once_with()

    def test_default_renderer_is_shared(self):
        """Test the module-level functions share one renderer."""
        assert get_default_renderer() is get_default_renderer()


class TestValidation:
    """Test argument validation at the public entry points."""

    @pytest.mark.parametrize("bad_container", [None, 42, "container", {"children": []}])
    def test_render_rejects_non_container(self, bad_container):
        """Test render_to_container rejects values without container_info."""
        with pytest.raises(ValidationError) as exc_info:
            render_to_container(bad_container, "x")

        assert exc_info.value.argument == "container"

    @pytest.mark.parametrize("bad_children", [42, {"type": "box"}, ["a", object()]])
    def test_render_rejects_bad_children(self, bad_children):
        """Test invalid children are rejected before anything is mutated."""
        container = create_container()
        render_to_container(container, "kept")

        with pytest.raises(ValidationError) as exc_info:
            render_to_container(container, bad_children)

        assert exc_info.value.argument == "children"
        assert container_to_elements(container) == ["kept"]

    def test_render_rejects_bad_callback(self):
        """Test a non-callable callback is rejected before anything is mutated."""
        container = create_container()

        with pytest.raises(ValidationError) as exc_info:
            render_to_container(container, "x", "not-callable")

        assert exc_info.value.argument == "callback"
        assert container_to_elements(container) == []

    def test_validation_error_is_type_error(self):
        """Test validation failures can be caught as TypeError."""
        with pytest.raises(TypeError):
            container_to_elements(None)

    def test_unmount_rejects_non_container(self):
        """Test unmount_at_container validates its argument."""
        with pytest.raises(ValidationError):
            unmount_at_container(object())


class TestHeadlessRenderer:
    """Test Level 2: configured renderer instances."""

    def test_default_configuration(self):
        """Test a renderer built without arguments uses the default config."""
        renderer = HeadlessRenderer()

        assert renderer.config == RendererConfig()
        assert renderer.correlation_id is None

    def test_correlation_tracking(self):
        """Test correlation IDs follow the tracking setting."""
        tracked = HeadlessRenderer(RendererConfig(correlation_id="abc"))
        untracked = HeadlessRenderer(
            RendererConfig(correlation_id="abc").override(
                global___enable_correlation_tracking=False
            )
        )

        assert tracked.correlation_id == "abc"
        assert untracked.correlation_id is None

    def test_statistics(self):
        """Test usage counters and engine statistics are reported together."""
        renderer = HeadlessRenderer()
        container = renderer.create_container()
        renderer.render_to_container(container, "a")
        renderer.render_to_container(container, "b")
        renderer.unmount_at_container(container)

        stats = renderer.statistics
        assert stats["containers_created"] == 1
        assert stats["renders"] == 2
        assert stats["unmounts"] == 1
        assert stats["total_commits"] == 3
        assert stats["last_commit"]["removals"] == 1

    def test_rejected_argument_logged(self, caplog):
        """Test validation failures are logged before being raised."""
        renderer = HeadlessRenderer(RendererConfig(correlation_id="log-test"))

        with caplog.at_level(logging.ERROR, logger="headless_renderer"):
            with pytest.raises(ValidationError):
                renderer.render_to_container(None, "x")

        record = caplog.records[-1]
        assert record.getMessage() == "Rejected invalid argument"
        assert record.argument == "container"
        assert record.correlation_id == "log-test"

    def test_renderers_with_different_levels_coexist(self, caplog):
        """Test each renderer's logging level applies to its own records only."""
        package_logger = logging.getLogger("headless_renderer")
        level_before = package_logger.level

        development = HeadlessRenderer(
            RendererConfig.development().override(correlation_id="dev")
        )
        production = HeadlessRenderer(
            RendererConfig.production().override(correlation_id="prod")
        )

        assert package_logger.level == level_before

        dev_container = development.create_container()
        prod_container = production.create_container()
        with caplog.at_level(logging.DEBUG, logger="headless_renderer"):
            development.render_to_container(dev_container, "x")
            production.render_to_container(prod_container, "y")

        dev_messages = [
            record.getMessage() for record in caplog.records
            if getattr(record, "correlation_id", None) == "dev"
        ]
        prod_records = [
            record for record in caplog.records
            if getattr(record, "correlation_id", None) == "prod"
        ]
        assert "Commit completed" in dev_messages
        assert "Rendering into container" in dev_messages
        assert prod_records == []

    def test_development_preset_verifies_tree(self):
        """Test the development preset checks invariants after each commit."""
        renderer = HeadlessRenderer(RendererConfig.development())
        container = renderer.create_container()
        renderer.render_to_container(container, [create_element("a", {"key": 1}), "b"])
        renderer.render_to_container(container, ["b", create_element("a", {"key": 1})])

        assert renderer.container_to_elements(container) == ["b", create_element("a")]

    def test_commit_hooks_reach_custom_host(self):
        """Test a custom host set is driven by the renderer."""
        host = HostConfig()
        host.prepare_for_commit = Mock()
        renderer = HeadlessRenderer(host=host)
        container = renderer.create_container()
        renderer.render_to_container(container, "x")

        host.prepare_for_commit.assert_called_once_with(container.container_info)

    def test_deferred_preset(self):
        """Test the deferred preset commits on the next event loop turn."""
        renderer = HeadlessRenderer(RendererConfig.deferred())
        container = renderer.create_container()
        done = Mock()

        async def scenario():
            renderer.render_to_container(container, "one")
            renderer.render_to_container(container, "two", done)
            pending = renderer.container_to_elements(container)
            await asyncio.sleep(0)
            return pending

        assert asyncio.run(scenario()) == []
        assert renderer.container_to_elements(container) == ["two"]
        done.assert_called_once_with()

    def test_deferred_flush(self):
        """Test flush commits deferred work immediately."""
        renderer = HeadlessRenderer(RendererConfig.deferred())
        container = renderer.create_container()

        async def scenario():
            renderer.render_to_container(container, "now")
            renderer.flush(container)
            return renderer.container_to_elements(container)

        assert asyncio.run(scenario()) == ["now"]


class TestInstanceTree:
    """Test the instance tree the renderer builds."""

    def test_instance_types(self):
        """Test elements become element instances and strings text instances."""
        container = create_container()
        render_to_container(container, [create_element("box", None, "t"), "u"])

        box, text = container.container_info.children
        assert isinstance(box, ElementInstance)
        assert isinstance(text, TextInstance)
        assert isinstance(box.children[0], TextInstance)
        assert "children" not in box.props

    def test_external_corruption_detected(self):
        """Test host mutations on foreign nodes raise InvariantViolation."""
        container = create_container()
        render_to_container(container, "a")

        with pytest.raises(InvariantViolation):
            remove_child(container.container_info, TextInstance("a"))
