# src/world/type_registry.py
"""
Ancestor-type lookup for binding conditions like "it:Person".

The registry maps each Python type to every name it answers to: its own
and all of its base classes' simple and qualified names, plus any extra
capability labels registered explicitly (structural interfaces that never
show up in the MRO, e.g. typing.Protocol implementations).

Types are registered lazily from their MRO on first lookup, so explicit
registration is only needed for extra capabilities.
"""

from __future__ import annotations

from threading import Lock
from typing import Any, Dict, FrozenSet, Set


def qualified_name(cls: type) -> str:
    """module.QualName, or just QualName for builtins."""
    module = getattr(cls, "__module__", None)
    if not module or module == "builtins":
        return cls.__qualname__
    return f"{module}.{cls.__qualname__}"


class TypeRegistry:
    """Registration table: type -> all simple / qualified ancestor names."""

    def __init__(self) -> None:
        self._names: Dict[type, FrozenSet[str]] = {}
        self._capabilities: Dict[type, Set[str]] = {}
        self._lock = Lock()

    def register(self, cls: type, *capabilities: str) -> None:
        """
        Register `cls` with optional extra capability names.

        Capabilities are inherited: a subclass registered later (or lazily)
        answers to its bases' capabilities too.
        """
        with self._lock:
            self._capabilities.setdefault(cls, set()).update(capabilities)
            # subclasses already computed may need the new capability
            self._names = {k: v for k, v in self._names.items() if not issubclass(k, cls)}

    def ancestor_names(self, cls: type) -> FrozenSet[str]:
        with self._lock:
            cached = self._names.get(cls)
            if cached is not None:
                return cached
            names: Set[str] = set()
            for ancestor in cls.__mro__:
                if ancestor is object:
                    continue
                names.add(ancestor.__name__)
                names.add(qualified_name(ancestor))
                names.update(self._capabilities.get(ancestor, ()))
            frozen = frozenset(names)
            self._names[cls] = frozen
            return frozen

    def satisfies_type(self, value: Any, type_name: str) -> bool:
        """Whether `value`'s type, or any ancestor, is called `type_name`."""
        return type_name in self.ancestor_names(type(value))

