"""Tests for page definition, descriptors, and lifecycle dispatch."""

from unittest.mock import Mock

import pytest

from tina import (
    DeclarationError,
    Page,
    PageBuilder,
    PageContext,
    PageDescriptor,
    PageStateError,
    SandboxHost,
    TinaConfig,
    define,
)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def host():
    return SandboxHost()


@pytest.fixture
def pages(host):
    return Page(register=host.register)


def spies(*names):
    return {name: Mock(name=name, return_value=None) for name in names}


# =============================================================================
# Hook dispatch
# =============================================================================


class TestLifecycleHooks:
    def test_core_hooks_called(self, pages, host):
        options = spies("onLoad", "onReady", "onShow", "onHide", "onUnload")
        pages.define(options)
        page = host.get_page(-1)

        for spy in options.values():
            spy.assert_not_called()

        for name in ("onLoad", "onReady", "onShow", "onHide", "onUnload"):
            host.emit(page, name)
            options[name].assert_called_once_with(page)

    def test_extended_hooks_called(self, pages, host):
        names = ("onPullDownRefresh", "onReachBottom", "onShareAppMessage", "onPageScroll", "onTabItemTap")
        options = spies(*names)
        pages.define(options)
        page = host.get_page(-1)

        # No onLoad declared: firing it is a no-op
        host.emit(page, "onLoad")
        for spy in options.values():
            spy.assert_not_called()

        for fired in names:
            host.emit(page, fired)
            for name in names:
                expected = 1 if names.index(name) <= names.index(fired) else 0
                assert options[name].call_count == expected

    def test_before_hook_called_before_on_hook(self, pages, host):
        order = []
        pages.define({
            "onLoad": lambda page: order.append("onLoad"),
            "beforeLoad": lambda page: order.append("beforeLoad"),
        })
        page = host.get_page(-1)
        assert order == []

        host.emit(page, "onLoad")
        assert order == ["beforeLoad", "onLoad"]

        host.emit(page, "onLoad")
        assert order == ["beforeLoad", "onLoad", "beforeLoad", "onLoad"]

    def test_arguments_forwarded(self, pages, host):
        on_load = Mock()
        pages.define({"onLoad": on_load})
        page = host.get_page(-1)

        host.emit(page, "onLoad", {"id": "7"})
        on_load.assert_called_once_with(page, {"id": "7"})

    def test_unknown_event_is_noop(self, pages, host):
        on_load = Mock()
        pages.define({"onLoad": on_load})
        page = host.get_page(-1)

        assert host.emit(page, "onSomethingElse") is None
        assert host.emit(page, "Resize") is None
        on_load.assert_not_called()

    def test_hook_result_returned_to_host(self, pages, host):
        pages.define({"onShareAppMessage": lambda page: {"title": "Hello"}})
        page = host.get_page(-1)
        assert host.emit(page, "onShareAppMessage") == {"title": "Hello"}

    def test_failing_hook_aborts_chain(self, pages, host):
        on_load = Mock()
        on_show = Mock()
        pages.define({
            "beforeLoad": Mock(side_effect=RuntimeError("denied")),
            "onLoad": on_load,
            "onShow": on_show,
        })
        page = host.get_page(-1)

        with pytest.raises(RuntimeError, match="denied"):
            host.emit(page, "onLoad")
        on_load.assert_not_called()

        # Other events are unaffected
        host.emit(page, "onShow")
        on_show.assert_called_once_with(page)

    def test_isolated_failures_run_remaining_hooks(self, host):
        on_load = Mock()
        pages = Page(register=host.register, config=TinaConfig(isolate_hook_failures=True))
        pages.define({
            "beforeLoad": Mock(side_effect=RuntimeError("denied")),
            "onLoad": on_load,
        })
        page = host.get_page(-1)

        with pytest.raises(RuntimeError, match="denied"):
            host.emit(page, "onLoad")
        on_load.assert_called_once_with(page)


# =============================================================================
# Page context
# =============================================================================


class TestPageContext:
    def test_data_visible_in_hook(self, pages, host):
        seen = []
        options = {
            "data": {"foo": "bar"},
            "onLoad": lambda page: seen.append(dict(page.data)),
        }
        pages.define(options)
        host.emit(host.get_page(-1), "onLoad")
        assert seen == [{"foo": "bar"}]

    def test_host_field_visible_in_hook(self, pages, host):
        seen = []
        pages.define({"onLoad": lambda page: seen.append(page.route)})
        page = host.get_page(-1)
        page.route = "/somewhere"

        host.emit(page, "onLoad")
        assert seen == ["/somewhere"]

    def test_data_defined_before_any_event(self, pages, host):
        options = {"data": {"foo": "bar"}}
        pages.define(options)
        assert host.get_page(-1).data == {"foo": "bar"}

    def test_page_data_does_not_alias_declaration(self, pages, host):
        options = {"data": {"user": {"name": "Ada"}}}
        pages.define(options)
        page = host.get_page(-1)

        page.data["user"]["name"] = "Grace"
        assert options["data"] == {"user": {"name": "Ada"}}

    def test_state_shared_across_events(self, pages, host):
        seen = []

        def on_load(page):
            page.data["count"] += 1

        def on_show(page):
            seen.append(page.data["count"])

        pages.define({"data": {"count": 0}, "onLoad": on_load, "onShow": on_show})
        page = host.get_page(-1)
        host.emit(page, "onLoad")
        host.emit(page, "onShow")
        assert seen == [1]

    def test_set_data_merges(self, pages, host):
        callback = Mock()

        def on_load(page):
            page.set_data({"user.name": "Grace", "ready": True}, callback)

        pages.define({"data": {"user": {"name": "Ada", "age": 36}}, "onLoad": on_load})
        page = host.get_page(-1)
        host.emit(page, "onLoad")

        assert page.data == {"user": {"name": "Grace", "age": 36}, "ready": True}
        callback.assert_called_once_with()

    def test_state_alias(self):
        page = PageContext({"a": 1})
        assert page.state is page.data

    def test_reserved_host_field_rejected(self):
        with pytest.raises(TypeError, match="reserved"):
            PageContext({}, data_fields=1, call=lambda: None)

    def test_emit_requires_descriptor(self):
        with pytest.raises(PageStateError):
            PageContext({}).emit("onLoad")

    def test_pages_from_one_descriptor_do_not_share_state(self):
        descriptor = PageBuilder().build({"data": {"items": []}})
        first, second = descriptor.instantiate(), descriptor.instantiate()
        first.data["items"].append("x")
        assert second.data == {"items": []}


# =============================================================================
# Compute
# =============================================================================


class TestCompute:
    def test_data_merged_with_compute(self, pages, host):
        options = {
            "data": {"foo": "bar"},
            "compute": lambda state: {"foobar": state["foo"] + "baz"},
        }
        pages.define(options)
        page = host.get_page(-1)
        host.emit(page, "onLoad")

        assert page.data == {"foo": "bar", "foobar": "barbaz"}

    def test_compute_runs_before_first_hook(self, pages, host):
        seen = []
        pages.define({
            "data": {"n": 2},
            "compute": lambda state: {"square": state["n"] ** 2},
            "beforeLoad": lambda page: seen.append(page.data.get("square")),
        })
        host.emit(host.get_page(-1), "onLoad")
        assert seen == [4]

    def test_compute_runs_exactly_once(self, pages, host):
        compute = Mock(return_value={"derived": True})
        pages.define({"data": {"a": 1}, "compute": compute})
        page = host.get_page(-1)

        host.emit(page, "onLoad")
        host.emit(page, "onShow")
        host.emit(page, "onLoad")

        compute.assert_called_once()
        assert page.has_derived is True

    def test_compute_gated_on_first_firing_not_event_name(self, pages, host):
        pages.define({"data": {"a": 1}, "compute": lambda state: {"b": state["a"] + 1}})
        page = host.get_page(-1)

        host.emit(page, "onLaunch")
        assert page.data == {"a": 1, "b": 2}

    def test_compute_failure_propagates_and_keeps_state(self, pages, host):
        on_load = Mock()
        pages.define({
            "data": {"a": 1},
            "compute": Mock(side_effect=ValueError("bad state")),
            "onLoad": on_load,
        })
        page = host.get_page(-1)

        with pytest.raises(ValueError, match="bad state"):
            host.emit(page, "onLoad")

        assert page.data == {"a": 1}
        assert page.has_derived is False
        on_load.assert_not_called()

    def test_set_data_does_not_rerun_compute(self, pages, host):
        compute = Mock(return_value={})
        pages.define({"compute": compute, "onLoad": lambda page: page.set_data({"x": 1})})
        page = host.get_page(-1)
        host.emit(page, "onLoad")
        page.set_data({"y": 2})
        assert compute.call_count == 1


# =============================================================================
# Methods
# =============================================================================


class TestMethods:
    def test_methods_called_in_page_context(self, pages, host):
        order = []
        foo = Mock(side_effect=lambda page: (order.append("foo"), page.bar()))
        bar = Mock(side_effect=lambda page: order.append("bar"))
        options = {
            "onLoad": lambda page: page.foo(),
            "methods": {"foo": foo, "bar": bar},
        }
        pages.define(options)
        page = host.get_page(-1)

        foo.assert_not_called()
        bar.assert_not_called()

        host.emit(page, "onLoad")

        foo.assert_called_once_with(page)
        bar.assert_called_once_with(page)
        assert order == ["foo", "bar"]

    def test_call_indirection(self, pages, host):
        def total(page, extra):
            return sum(page.data["values"]) + extra

        results = []
        pages.define({
            "data": {"values": [1, 2, 3]},
            "methods": {"total": total},
            "onLoad": lambda page: results.append(page.call("total", 4)),
        })
        host.emit(host.get_page(-1), "onLoad")
        assert results == [10]

    def test_methods_attached_on_first_firing(self, pages, host):
        pages.define({"methods": {"foo": Mock()}})
        page = host.get_page(-1)

        assert page.methods_attached is False
        with pytest.raises(PageStateError):
            page.call("foo")
        with pytest.raises(AttributeError):
            page.foo

        host.emit(page, "onShow")
        assert page.methods_attached is True
        page.foo()

    def test_unknown_method(self, pages, host):
        pages.define({"methods": {}})
        page = host.get_page(-1)
        host.emit(page, "onLoad")
        with pytest.raises(AttributeError, match="no method 'missing'"):
            page.call("missing")

    def test_methods_bound_per_page(self):
        descriptor = PageBuilder().build({"methods": {"who": lambda page: page}})
        first, second = descriptor.instantiate(), descriptor.instantiate()
        descriptor.fire(first, "onLoad")
        descriptor.fire(second, "onLoad")
        assert first.who() is first
        assert second.who() is second


# =============================================================================
# Descriptor
# =============================================================================


class TestPageDescriptor:
    def test_keys_are_events_data_and_passthrough(self):
        descriptor = PageBuilder().build({
            "data": {"a": 1},
            "beforeLoad": Mock(),
            "onShow": Mock(),
            "methods": {"foo": Mock()},
            "compute": lambda state: {},
            "options": {"styleIsolation": "shared"},
        })
        assert set(descriptor) == {"onLoad", "onShow", "data", "options"}
        assert descriptor["options"] == {"styleIsolation": "shared"}
        assert descriptor["data"] == {"a": 1}
        assert descriptor.events == ["Load", "Show"]

    def test_undeclared_hooks_absent(self):
        descriptor = PageBuilder().build({"onLoad": Mock()})
        assert "onShow" not in descriptor
        assert descriptor.get("onShow") is None
        page = descriptor.instantiate()
        assert not hasattr(page, "onShow")

    def test_build_executes_nothing(self):
        options = spies("onLoad", "beforeLoad")
        compute = Mock()
        PageBuilder().build({**options, "compute": compute, "methods": {"m": Mock()}})
        for spy in options.values():
            spy.assert_not_called()
        compute.assert_not_called()

    def test_dispatcher_called_directly(self):
        on_load = Mock()
        descriptor = PageBuilder().build({"onLoad": on_load})
        page = descriptor.instantiate(route="/home")

        descriptor["onLoad"](page, {"q": 1})
        on_load.assert_called_once_with(page, {"q": 1})
        assert page.route == "/home"

    def test_dispatcher_rejects_foreign_page(self):
        descriptor = PageBuilder().build({"onLoad": Mock()})
        with pytest.raises(TypeError):
            descriptor["onLoad"](object())

    def test_teardown_stops_further_firings(self):
        on_show = Mock()
        descriptor = PageBuilder().build({"onShow": on_show, "onUnload": Mock()})
        page = descriptor.instantiate()

        descriptor.fire(page, "onUnload")
        assert page.torn_down is True

        descriptor.fire(page, "onShow")
        on_show.assert_not_called()

    def test_teardown_event_configurable(self):
        descriptor = PageBuilder(TinaConfig(teardown_event="Destroy")).build({})
        page = descriptor.instantiate()

        descriptor.fire(page, "onUnload")
        assert page.torn_down is False
        descriptor.fire(page, "onDestroy")
        assert page.torn_down is True


# =============================================================================
# Declaration errors
# =============================================================================


class TestDeclarationErrors:
    def test_non_mapping_declaration(self):
        with pytest.raises(DeclarationError, match="must be a mapping"):
            PageBuilder().build(["onLoad"])

    def test_non_callable_hook(self):
        with pytest.raises(DeclarationError, match="onLoad"):
            PageBuilder().build({"onLoad": "load"})

    def test_non_callable_method(self):
        with pytest.raises(DeclarationError, match="Method 'foo'"):
            PageBuilder().build({"methods": {"foo": 1}})

    def test_methods_must_be_mapping(self):
        with pytest.raises(DeclarationError, match="'methods' must be a mapping"):
            PageBuilder().build({"methods": [Mock()]})

    @pytest.mark.parametrize("name", ["data", "call", "set_data", "emit", "_private"])
    def test_method_shadowing_context_rejected(self, name):
        with pytest.raises(DeclarationError, match="shadow"):
            PageBuilder().build({"methods": {name: Mock()}})

    def test_non_callable_compute(self):
        with pytest.raises(DeclarationError, match="compute"):
            PageBuilder().build({"compute": {"a": 1}})

    def test_inert_fields_accepted(self):
        descriptor = PageBuilder().build({"once": 1, "on": 2, "before": 3, "behaviors": []})
        assert descriptor.events == []
        assert descriptor["once"] == 1

    def test_define_does_not_register_invalid_page(self, host):
        with pytest.raises(DeclarationError):
            Page(register=host.register).define({"onLoad": 42})
        assert host.pages == []


# =============================================================================
# Registration
# =============================================================================


class TestRegistration:
    def test_register_called_once_with_descriptor(self):
        register = Mock(return_value="host-specific")
        descriptor = Page(register=register).define({"onLoad": Mock()})

        register.assert_called_once_with(descriptor)
        assert isinstance(descriptor, PageDescriptor)

    def test_module_level_define(self):
        register = Mock()
        descriptor = define({"data": {"a": 1}}, register=register)
        register.assert_called_once_with(descriptor)

    def test_register_must_be_callable(self):
        with pytest.raises(TypeError):
            Page(register="Page")

    def test_sandbox_pages_indexed_by_registration(self, pages, host):
        pages.define({"data": {"n": 1}})
        pages.define({"data": {"n": 2}})
        assert host.get_page(0).data == {"n": 1}
        assert host.get_page(-1).data == {"n": 2}
        assert len(host.descriptors) == 2

        host.reset()
        assert host.pages == []
