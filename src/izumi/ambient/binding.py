"""
Two-way bindings over attributes of environment objects.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

T = TypeVar("T")
V = TypeVar("V")


class Binding(Generic[V]):
    """A read/write accessor for a value owned by someone else."""

    __slots__ = ("_getter", "_setter", "_description")

    def __init__(self, getter: Callable[[], V], setter: Callable[[V], None], description: str = "binding"):
        self._getter = getter
        self._setter = setter
        self._description = description

    @classmethod
    def to_attribute(cls, owner: object, name: str) -> Binding[Any]:
        """Bind to ``owner.name``."""
        return cls(
            lambda: getattr(owner, name),
            lambda value: setattr(owner, name, value),
            f"{type(owner).__qualname__}.{name}",
        )

    def get(self) -> V:
        return self._getter()

    def set(self, value: V) -> None:
        self._setter(value)

    @property
    def value(self) -> V:
        return self._getter()

    @value.setter
    def value(self, value: V) -> None:
        self._setter(value)

    def __repr__(self) -> str:
        return f"Binding({self._description})"


class ObjectWrapper(Generic[T]):
    """
    Projection of an environment object that yields bindings to its attributes.

    ``wrapper.number`` is a ``Binding`` for ``obj.number``; the wrapper never
    copies the object, so writes land on the shared instance.
    """

    __slots__ = ("_object",)

    def __init__(self, obj: T):
        object.__setattr__(self, "_object", obj)

    @property
    def wrapped(self) -> T:
        """The underlying object."""
        return self._object  # type: ignore[no-any-return]

    def __getattr__(self, name: str) -> Binding[Any]:
        if name.startswith("_"):
            raise AttributeError(name)
        target = object.__getattribute__(self, "_object")
        if not hasattr(target, name):
            raise AttributeError(f"{type(target).__qualname__} has no attribute {name!r}")
        return Binding.to_attribute(target, name)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("ObjectWrapper is read-only; assign through the binding's value")

    def __repr__(self) -> str:
        return f"ObjectWrapper({type(self._object).__qualname__})"
