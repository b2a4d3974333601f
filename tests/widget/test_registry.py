from __future__ import annotations

from showmore.core.models import Instance
from showmore.widget.registry import InstanceRegistry


def test_create_lookup_remove():
    registry = InstanceRegistry()
    instance = registry.create(Instance(handle="a", original_content="x"))

    assert registry.lookup("a") is instance
    assert "a" in registry
    assert len(registry) == 1
    assert registry.remove("a") is instance
    assert registry.lookup("a") is None
    assert registry.remove("a") is None


def test_create_keeps_existing_instance():
    registry = InstanceRegistry()
    first = registry.create(Instance(handle="a", original_content="x"))
    second = registry.create(Instance(handle="a", original_content="y"))

    assert second is first
    assert registry.lookup("a").original_content == "x"


def test_iteration_lists_handles():
    registry = InstanceRegistry()
    registry.create(Instance(handle="a", original_content="x"))
    registry.create(Instance(handle="b", original_content="y"))

    assert sorted(registry) == ["a", "b"]
