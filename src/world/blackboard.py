# src/world/blackboard.py
"""
Blackboard: the bound-value store an agent process reads and writes.

The planner core only reads from it, through a resolver. Values can be
bound to names, or added anonymously (bound to the default name "it"),
and explicit boolean condition flags can be set directly.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Tuple

from .type_registry import TypeRegistry


# Default binding name for anonymous objects
DEFAULT_BINDING = "it"
# Matches any bound object, like DEFAULT_BINDING
ALL_BINDING = "all"
ANY_BINDINGS = (DEFAULT_BINDING, ALL_BINDING)


class Blackboard:
    """
    In-memory bound-value store.

    - bindings: name -> value (latest wins)
    - objects: every value ever added, in insertion order, each with the
      label it was added under
    - labels: optional type label per binding name, for mapping values
      (untyped records)
    - conditions: explicitly set boolean flags
    """

    def __init__(self) -> None:
        self._bindings: Dict[str, Any] = {}
        self._entries: List[Tuple[Any, Optional[str]]] = []
        self._labels: Dict[str, str] = {}
        self._conditions: Dict[str, bool] = {}

    def __getitem__(self, name: str) -> Any:
        return self._bindings[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self.bind(name, value)

    def __contains__(self, name: object) -> bool:
        return name in self._bindings

    def get(self, name: str) -> Optional[Any]:
        return self._bindings.get(name)

    def bind(self, name: str, value: Any, label: Optional[str] = None) -> "Blackboard":
        """
        Bind `value` to `name`.

        `label` names the record type of a mapping value, so that
        "name:Label" conditions can match untyped structured data. The
        label belongs to this binding: rebinding `name` without one clears it.
        """
        if label is not None:
            if not isinstance(value, Mapping):
                raise TypeError(f"Only mapping values can carry a label, got {type(value).__name__}")
            self._labels[name] = label
        else:
            self._labels.pop(name, None)
        self._bindings[name] = value
        self._entries.append((value, label))
        return self

    def add_object(self, value: Any, label: Optional[str] = None) -> "Blackboard":
        """Add an anonymous value; it becomes the default ("it") binding."""
        return self.bind(DEFAULT_BINDING, value, label=label)

    def __iadd__(self, value: Any) -> "Blackboard":
        return self.add_object(value)

    @property
    def objects(self) -> List[Any]:
        """Every value added, oldest first."""
        return [value for value, _ in self._entries]

    def bindings(self) -> Dict[str, Any]:
        return dict(self._bindings)

    def label_of(self, name: str) -> Optional[str]:
        """Label the current binding of `name` was made with, if any."""
        return self._labels.get(name)

    def last_result(self) -> Optional[Any]:
        return self._entries[-1][0] if self._entries else None

    # ------------------------------------------------------------------
    # Explicit condition flags
    # ------------------------------------------------------------------

    def set_condition(self, key: str, value: bool) -> "Blackboard":
        self._conditions[key] = bool(value)
        return self

    def get_condition(self, key: str) -> Optional[bool]:
        return self._conditions.get(key)

    # ------------------------------------------------------------------
    # Typed lookup
    # ------------------------------------------------------------------

    def matches(
        self, value: Any, type_name: str, registry: TypeRegistry, label: Optional[str] = None
    ) -> bool:
        """Type match by ancestor name, or by the label a mapping was bound with."""
        if registry.satisfies_type(value, type_name):
            return True
        return label is not None and label == type_name

    def get_value(self, variable: str, type_name: str, registry: TypeRegistry) -> Optional[Any]:
        """
        Value bound to `variable` that satisfies `type_name`.

        Named variables must be bound precisely. The "it" / "all" names
        fall back to the most recently added object of a matching type.
        """
        bound = self._bindings.get(variable)
        if bound is not None and self.matches(bound, type_name, registry, self._labels.get(variable)):
            return bound
        if variable not in ANY_BINDINGS:
            return None
        for value, label in reversed(self._entries):
            if self.matches(value, type_name, registry, label):
                return value
        return None

    def info_string(self) -> str:
        bound = ", ".join(f"{k}={type(v).__name__}" for k, v in sorted(self._bindings.items()))
        flags = ", ".join(f"{k}={v}" for k, v in sorted(self._conditions.items()))
        return f"Blackboard(bindings=[{bound}], objects={len(self._entries)}, conditions=[{flags}])"
