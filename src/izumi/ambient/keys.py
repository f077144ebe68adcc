"""
TypeKey implementation for ambient object lookup.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class TypeKey:
    """A key that identifies an environment object by its exact declared type."""

    target_type: type

    @classmethod
    def of(cls, target_type: type[T]) -> TypeKey:
        """Create a TypeKey for the given type."""
        if not isinstance(target_type, type):
            raise TypeError(f"TypeKey requires a class, got {target_type!r}")
        return cls(target_type)

    @classmethod
    def of_instance(cls, instance: Any) -> TypeKey:
        """Create a TypeKey for the runtime class of an instance."""
        return cls(type(instance))

    def __str__(self) -> str:
        return getattr(self.target_type, "__qualname__", str(self.target_type))

    def __hash__(self) -> int:
        return hash(self.target_type)
