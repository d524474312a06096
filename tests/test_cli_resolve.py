"""Tests for roost.cli._resolve — registry import resolution."""

import sys
import types

import pytest

from roost.cli._resolve import resolve_registry
from roost.dispatch.node import DispatchNode


@pytest.fixture
def _fake_registry_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module with DispatchNodes on sys.modules."""
    mod = types.ModuleType("_fake_roost_registry")
    mod.registry = DispatchNode()  # type: ignore[attr-defined]
    mod.custom = DispatchNode()  # type: ignore[attr-defined]
    mod.factory = DispatchNode  # type: ignore[attr-defined]
    mod.not_a_node = "just a string"  # type: ignore[attr-defined]
    mod.bad_factory = lambda: "not a node"  # type: ignore[attr-defined]

    def broken() -> DispatchNode:
        raise RuntimeError("factory exploded")

    mod.broken = broken  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_roost_registry", mod)


@pytest.mark.usefixtures("_fake_registry_module")
class TestResolveRegistry:
    def test_explicit_attribute(self) -> None:
        node = resolve_registry("_fake_roost_registry:registry")
        assert node is sys.modules["_fake_roost_registry"].registry

    def test_custom_attribute(self) -> None:
        node = resolve_registry("_fake_roost_registry:custom")
        assert node is sys.modules["_fake_roost_registry"].custom

    def test_default_attribute(self) -> None:
        """Omitting :attr defaults to 'registry'."""
        node = resolve_registry("_fake_roost_registry")
        assert node is sys.modules["_fake_roost_registry"].registry

    def test_factory(self) -> None:
        assert isinstance(resolve_registry("_fake_roost_registry:factory"), DispatchNode)

    def test_broken_factory(self) -> None:
        with pytest.raises(TypeError, match="factory exploded"):
            resolve_registry("_fake_roost_registry:broken")

    def test_factory_returning_non_node(self) -> None:
        with pytest.raises(TypeError, match=r"str, not a roost\.DispatchNode"):
            resolve_registry("_fake_roost_registry:bad_factory")

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_registry("nonexistent_module_xyz:registry")

    def test_missing_attribute(self) -> None:
        with pytest.raises(AttributeError):
            resolve_registry("_fake_roost_registry:does_not_exist")

    def test_wrong_type(self) -> None:
        with pytest.raises(TypeError, match=r"not a roost\.DispatchNode"):
            resolve_registry("_fake_roost_registry:not_a_node")
