"""Registry of attached widget instances, keyed by opaque handle."""

from __future__ import annotations

from typing import Iterator, Optional

from showmore.core.models import Instance


class InstanceRegistry:
    def __init__(self) -> None:
        self._instances: dict[str, Instance] = {}

    def create(self, instance: Instance) -> Instance:
        """Register ``instance``; an existing handle keeps its instance."""
        return self._instances.setdefault(instance.handle, instance)

    def lookup(self, handle: str) -> Optional[Instance]:
        return self._instances.get(handle)

    def remove(self, handle: str) -> Optional[Instance]:
        return self._instances.pop(handle, None)

    def __contains__(self, handle: object) -> bool:
        return handle in self._instances

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._instances))

    def __len__(self) -> int:
        return len(self._instances)
