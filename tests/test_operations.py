"""Tests for operation binding and invocation."""

from typing import Any

import pytest

from roost._internal.invoke import accepts_cursor_and_payload, bind_operation, call_operation
from roost.dispatch.cursor import DelimitedPath, PathCursor
from roost.dispatch.entry import Operation
from roost.dispatch.node import DispatchNode
from roost.errors import InvocationError, OperationError, OperationNotFound


class Controller:
    """Stand-in for a host component whose methods are exposed as operations."""

    def __init__(self) -> None:
        self.resets = 0

    def reset_controller(self, cursor: PathCursor, payload: Any) -> int:
        self.resets += 1
        return self.resets

    def describe(self, cursor: PathCursor, payload: Any) -> str:
        return f"path:{cursor.render()} payload:{payload}"

    def no_args(self) -> str:
        return "never"

    def _private(self, cursor: PathCursor, payload: Any) -> str:
        return "hidden"

    label = "not callable"


class TestBindOperation:
    def test_method_on_object(self) -> None:
        controller = Controller()
        func = bind_operation(controller, "reset_controller")
        assert func(DelimitedPath(), None) == 1

    def test_mapping_table(self) -> None:
        table = {"echo": lambda cursor, payload: payload}
        func = bind_operation(table, "echo")
        assert func(DelimitedPath(), "hi") == "hi"

    def test_missing(self) -> None:
        with pytest.raises(OperationNotFound, match="no such callable"):
            bind_operation(Controller(), "reboot")

    def test_missing_from_mapping(self) -> None:
        with pytest.raises(OperationNotFound):
            bind_operation({}, "echo")

    def test_private(self) -> None:
        with pytest.raises(OperationNotFound, match="public"):
            bind_operation(Controller(), "_private")

    def test_not_callable(self) -> None:
        with pytest.raises(OperationNotFound, match="not callable"):
            bind_operation(Controller(), "label")

    def test_wrong_shape(self) -> None:
        with pytest.raises(OperationNotFound, match=r"\(cursor, payload\)"):
            bind_operation(Controller(), "no_args")


class TestAcceptsCursorAndPayload:
    def test_two_positional(self) -> None:
        assert accepts_cursor_and_payload(lambda a, b: None)

    def test_varargs(self) -> None:
        assert accepts_cursor_and_payload(lambda *args: None)

    def test_extra_defaults(self) -> None:
        assert accepts_cursor_and_payload(lambda a, b, c=1: None)

    def test_one_positional(self) -> None:
        assert not accepts_cursor_and_payload(lambda a: None)

    def test_three_required(self) -> None:
        assert not accepts_cursor_and_payload(lambda a, b, c: None)


class TestCallOperation:
    def test_returns_result(self) -> None:
        assert call_operation("x", lambda cursor, payload: payload * 2, DelimitedPath(), 21) == 42

    def test_propagates_operation_errors(self) -> None:
        def fails(cursor: PathCursor, payload: Any) -> Any:
            raise ValueError("bad input")

        with pytest.raises(ValueError, match="bad input"):
            call_operation("x", fails, DelimitedPath(), None)

    def test_not_callable(self) -> None:
        with pytest.raises(InvocationError, match="no longer callable"):
            call_operation("x", "oops", DelimitedPath(), None)  # type: ignore[arg-type]

    def test_coroutine_rejected(self) -> None:
        async def later(cursor: PathCursor, payload: Any) -> str:
            return "late"

        with pytest.raises(InvocationError, match="awaitable") as exc_info:
            call_operation("later", later, DelimitedPath(), None)
        assert exc_info.value.name == "later"


class TestNodeOperations:
    def test_pops_residual(self) -> None:
        node = DispatchNode()
        node.add_operation("cmd", lambda cursor, payload: cursor.pop_next())
        assert node.get("cmd/hello") == "hello"

    def test_receives_same_cursor(self) -> None:
        node = DispatchNode()
        node.add_operation("cmd", lambda cursor, payload: cursor)
        cursor = DelimitedPath("cmd/a/b")
        assert node.resolve(cursor) is cursor
        assert list(cursor) == ["a", "b"]

    def test_receives_payload(self) -> None:
        node = DispatchNode()
        node.add_operation("echo", lambda cursor, payload: payload)
        sentinel = object()
        assert node.get("echo", sentinel) is sentinel

    def test_residual_may_be_left(self) -> None:
        node = DispatchNode()
        node.add_operation("count", lambda cursor, payload: len(list(cursor)))
        cursor = DelimitedPath("count/a/b/c")
        assert node.resolve(cursor) == 3
        assert list(cursor) == ["a", "b", "c"]

    def test_operation_can_continue_resolution(self) -> None:
        inner = DispatchNode()
        inner.add_value("x", "inner-x")

        node = DispatchNode()
        node.add_operation("via", lambda cursor, payload: inner.resolve(cursor, payload))
        assert node.get("via/x") == "inner-x"

    def test_subclass_methods(self) -> None:
        class Echo(DispatchNode):
            def __init__(self) -> None:
                super().__init__()
                self.add_operation("testObject", "test_object")
                self.add_operation("test2", "test_cursor")

            def test_object(self, cursor: PathCursor, payload: Any) -> str:
                return f"path:{cursor} args:{payload}"

            def test_cursor(self, cursor: PathCursor, payload: Any) -> str:
                return f"pop:{cursor.pop_next()}"

        echo = Echo()
        assert echo.get("testObject/nice", "test1argument") == "path:/nice args:test1argument"
        assert echo.get("testObject/nice", 12) == "path:/nice args:12"
        assert echo.get("test2/nice") == "pop:nice"

    def test_external_target(self) -> None:
        controller = Controller()
        front = DispatchNode(target=controller)
        front.add_operation("reset", "reset_controller")
        assert front.target is controller
        assert front.get("reset") == 1
        assert front.get("reset") == 2
        assert controller.resets == 2

    def test_default_target_is_self(self) -> None:
        node = DispatchNode()
        assert node.target is node

    def test_name_defaults_to_operation(self) -> None:
        front = DispatchNode(target=Controller())
        front.add_operation("describe")
        assert front.get("describe/a", 5) == "path:/a payload:5"

    def test_mapping_target(self) -> None:
        node = DispatchNode(target={"ping": lambda cursor, payload: "pong"})
        node.add_operation("ping")
        assert node.get("ping") == "pong"

    def test_operation_not_found(self) -> None:
        node = DispatchNode(target=Controller())
        with pytest.raises(OperationNotFound):
            node.add_operation("nonexistent", "nonexistent")
        assert not node.has_name("nonexistent")

    def test_direct_callable_wrong_shape(self) -> None:
        with pytest.raises(OperationNotFound):
            DispatchNode().add_operation("x", lambda: None)  # type: ignore[arg-type]

    def test_direct_callable_keeps_function_name(self) -> None:
        def ping(cursor: PathCursor, payload: Any) -> str:
            return "pong"

        node = DispatchNode()
        node.add_operation("p", ping)
        entry = node.entry("p")
        assert isinstance(entry, Operation)
        assert entry.name == "ping"

    def test_decorator(self) -> None:
        node = DispatchNode()

        @node.operation("greet")
        def greet(cursor: PathCursor, payload: Any) -> str:
            return f"hello {cursor.pop_next()}"

        assert node.get("greet/world") == "hello world"
        assert greet(DelimitedPath("you"), None) == "hello you"

    def test_decorator_default_name(self) -> None:
        node = DispatchNode()

        @node.operation()
        def status(cursor: PathCursor, payload: Any) -> str:
            return "ok"

        assert node.get("status") == "ok"

    def test_domain_error_propagates_through_children(self) -> None:
        def test_exception_throw(cursor: PathCursor, payload: Any) -> Any:
            raise OperationError("This is the message", condition="E42")

        root = DispatchNode()
        root.child("a").child("b").add_operation("boom", test_exception_throw)
        with pytest.raises(OperationError) as exc_info:
            root.get("a/b/boom", "test1argument")
        assert exc_info.value.condition == "E42"
        assert str(exc_info.value) == "This is the message"

    def test_coroutine_operation(self) -> None:
        async def later(cursor: PathCursor, payload: Any) -> str:
            return "late"

        node = DispatchNode()
        node.add_operation("later", later)
        with pytest.raises(InvocationError):
            node.get("later")

    def test_operation_may_mutate_own_node(self) -> None:
        node = DispatchNode()

        def register(cursor: PathCursor, payload: Any) -> list[str]:
            node.add_value(cursor.pop_next() or "", payload)
            return sorted(node.list_names())

        node.add_operation("register", register)
        assert node.get("register/temp", 72) == ["register", "temp"]
        assert node.get("temp") == 72


class TestNodeApiNotBindable:
    @pytest.mark.parametrize("method", ["add_value", "add_operation", "get", "resolve", "add_child"])
    def test_base_methods_by_name(self, method: str) -> None:
        node = DispatchNode()
        with pytest.raises(OperationNotFound, match="own methods"):
            node.add_operation(method)
        assert not node.has_name(method)

    def test_base_method_passed_directly(self) -> None:
        node = DispatchNode()
        with pytest.raises(OperationNotFound):
            node.add_operation("store", node.add_value)

    def test_base_method_of_external_node_target(self) -> None:
        other = DispatchNode()
        front = DispatchNode(target=other)
        with pytest.raises(OperationNotFound):
            front.add_operation("put", "add_value")

    def test_get_all_leaves_names_as_strings(self) -> None:
        node = DispatchNode()
        node.add_value("a", 1)
        with pytest.raises(OperationNotFound):
            node.add_operation("add_value")
        node.get_all()
        assert node.list_names() == ["a"]

    def test_subclass_methods_still_bind(self) -> None:
        class Store(DispatchNode):
            def put(self, cursor: PathCursor, payload: Any) -> str:
                self.add_value(cursor.pop_next() or "", payload)
                return "stored"

            def get(self, path: Any, payload: Any = None) -> Any:
                return super().get(path, payload)

        store = Store()
        store.add_operation("put")
        store.add_operation("fetch", "get")
        assert store.get("put/k", 5) == "stored"
        assert store.get("fetch/k") == 5


class _Opaque:
    """A callable whose signature cannot be introspected."""

    __signature__ = 42

    def __call__(self, only_one: Any) -> str:
        return "called"


class TestUninspectableCallables:
    def test_accepted_at_registration(self) -> None:
        assert accepts_cursor_and_payload(_Opaque())
        node = DispatchNode()
        node.add_operation("opaque", _Opaque())
        assert node.has_name("opaque")

    def test_wrong_arity_surfaces_as_type_error(self) -> None:
        node = DispatchNode()
        node.add_operation("opaque", _Opaque())
        with pytest.raises(TypeError):
            node.get("opaque")
