# src/planning/world_state.py
"""
Immutable world-state snapshot used by the GOAP search.

A WorldState is just a mapping from condition name to ConditionValue.
Equality and hashing are purely structural, which is what lets the A*
search use states as dictionary keys for g-scores, parent links and the
closed set.
"""

from __future__ import annotations

import json
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from collections.abc import Mapping as MappingABC

from .conditions import ConditionValue


class WorldState(MappingABC):
    """Frozen mapping of condition name -> ConditionValue."""

    __slots__ = ("_state", "_hash")

    def __init__(self, state: Optional[Mapping[str, ConditionValue]] = None) -> None:
        self._state: Dict[str, ConditionValue] = dict(state or {})
        self._hash: Optional[int] = None

    # ------------------------------------------------------------------
    # Mapping protocol
    # ------------------------------------------------------------------

    def __getitem__(self, key: str) -> ConditionValue:
        return self._state[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._state)

    def __len__(self) -> int:
        return len(self._state)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, WorldState):
            return self._state == other._state
        return NotImplemented

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(frozenset(self._state.items()))
        return self._hash

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v}" for k, v in sorted(self._state.items()))
        return f"WorldState({inner})"

    # ------------------------------------------------------------------
    # Functional updates
    # ------------------------------------------------------------------

    @property
    def state(self) -> Dict[str, ConditionValue]:
        """Copy of the underlying mapping."""
        return dict(self._state)

    def with_condition(self, name: str, value: ConditionValue) -> "WorldState":
        """Return a new state with one condition set to `value`."""
        updated = dict(self._state)
        updated[name] = value
        return WorldState(updated)

    def merged(self, changes: Mapping[str, ConditionValue]) -> "WorldState":
        """Return a new state with every entry of `changes` applied."""
        if not changes:
            return self
        updated = dict(self._state)
        updated.update(changes)
        return WorldState(updated)

    def __add__(self, pair: Tuple[str, ConditionValue]) -> "WorldState":
        name, value = pair
        return self.with_condition(name, value)

    # ------------------------------------------------------------------
    # Unknown handling
    # ------------------------------------------------------------------

    def unknown_conditions(self) -> List[str]:
        """Names of conditions that have not been evaluated yet."""
        return sorted(k for k, v in self._state.items() if v is ConditionValue.UNKNOWN)

    def variants(self, condition: str) -> List["WorldState"]:
        """The two definite variants of this state for one condition."""
        return [
            self.with_condition(condition, ConditionValue.TRUE),
            self.with_condition(condition, ConditionValue.FALSE),
        ]

    def with_one_change(self) -> List["WorldState"]:
        """
        Every state that differs from this one in exactly one condition.

        Each condition is flipped to each of the other two values, so a
        state with N conditions yields 2*N neighbours.
        """
        result: List[WorldState] = []
        for condition, current in self._state.items():
            for alternative in ConditionValue:
                if alternative is not current:
                    result.append(self.with_condition(condition, alternative))
        return result

    def info_string(self, verbose: bool = False) -> str:
        if verbose:
            return json.dumps(
                {k: v.name for k, v in self._state.items()},
                indent=2,
                sort_keys=True,
            )
        return repr(self)
