"""
Environment values and the per-evaluation environment scope.

The environment has two channels:

- ``EnvironmentValues``: arbitrary pure values keyed by ``EnvironmentKey``.
  Reads never fail; a missing key yields the key's default.
- ``ObjectTable``: shared objects keyed by type. Reads fail when absent.

Both are immutable. A view modifier produces a new ``Environment`` for its
subtree, so nothing written below a node is ever visible above it or in a
sibling subtree.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from .errors import ReadOnlyEnvironmentKeyError
from .object_table import ObjectTable

T = TypeVar("T")


class EnvironmentKey(Generic[T]):
    """
    Identity of one pure-value environment entry.

    Keys compare by identity, so two keys with the same name are still
    distinct entries. Read-only keys are written by the library itself and
    are rejected by set() and transform().
    """

    def __init__(self, name: str, default: T, *, read_only: bool = False):
        self.name = name
        self.default = default
        self.read_only = read_only

    def __repr__(self) -> str:
        return f"EnvironmentKey({self.name!r})"


class EnvironmentValues:
    """Immutable mapping from EnvironmentKey to value, with per-key defaults."""

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[EnvironmentKey[Any], Any] | None = None):
        self._values: Mapping[EnvironmentKey[Any], Any] = MappingProxyType(dict(values or {}))

    def get(self, key: EnvironmentKey[T]) -> T:
        """Get the value for the key, or the key's default if it was never set."""
        if key in self._values:
            return self._values[key]  # type: ignore[no-any-return]
        return key.default

    def contains(self, key: EnvironmentKey[Any]) -> bool:
        """Check if the key was explicitly set."""
        return key in self._values

    def set(self, key: EnvironmentKey[T], value: T) -> EnvironmentValues:
        """
        Return a copy with ``key`` set to ``value``.

        Raises:
            ReadOnlyEnvironmentKeyError: If the key is read-only
        """
        _check_writable(key)
        return self._replace(key, value)

    def _replace(self, key: EnvironmentKey[T], value: T) -> EnvironmentValues:
        updated = dict(self._values)
        updated[key] = value
        return EnvironmentValues(updated)

    def transform(self, key: EnvironmentKey[T], fn: Callable[[T], T]) -> EnvironmentValues:
        """Return a copy with ``key`` replaced by ``fn(current value)``."""
        return self.set(key, fn(self.get(key)))

    def __iter__(self) -> Iterator[EnvironmentKey[Any]]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        entries = ", ".join(f"{key.name}={value!r}" for key, value in self._values.items())
        return f"EnvironmentValues({entries})"


@dataclass(frozen=True)
class Environment:
    """The complete ambient context visible at one position of the view tree."""

    values: EnvironmentValues = field(default_factory=EnvironmentValues)
    objects: ObjectTable = field(default_factory=ObjectTable.empty)

    @classmethod
    def root(cls) -> Environment:
        """The environment at the root of a tree, before any modifier runs."""
        return cls()

    def get(self, key: EnvironmentKey[T]) -> T:
        """Shortcut for ``self.values.get(key)``."""
        return self.values.get(key)

    def with_values(self, values: EnvironmentValues) -> Environment:
        return Environment(values, self.objects)

    def with_objects(self, objects: ObjectTable) -> Environment:
        return Environment(self.values, objects)


class EnvironmentTransform:
    """
    A pure function from the parent's environment to the subtree's environment.

    View modifiers hold one of these; the renderer applies it once per
    evaluation before descending into the modified view.
    """

    def __init__(self, apply: Callable[[Environment], Environment], description: str):
        self._apply = apply
        self.description = description

    def __call__(self, environment: Environment) -> Environment:
        return self._apply(environment)

    def then(self, other: EnvironmentTransform) -> EnvironmentTransform:
        """Compose two transforms; ``self`` runs first."""
        return EnvironmentTransform(
            lambda environment: other(self(environment)),
            f"{self.description}; {other.description}",
        )

    def __repr__(self) -> str:
        return f"EnvironmentTransform({self.description})"


def _check_writable(key: EnvironmentKey[Any]) -> None:
    if key.read_only:
        raise ReadOnlyEnvironmentKeyError(f"{key.name} is managed by the library and cannot be written")


def set_value(key: EnvironmentKey[T], value: T) -> EnvironmentTransform:
    """Transform that sets a pure environment value for a subtree."""
    _check_writable(key)
    return EnvironmentTransform(
        lambda environment: environment.with_values(environment.values.set(key, value)),
        f"set {key.name}",
    )


def transform_value(key: EnvironmentKey[T], fn: Callable[[T], T]) -> EnvironmentTransform:
    """Transform that rewrites a pure environment value for a subtree."""
    _check_writable(key)
    return EnvironmentTransform(
        lambda environment: environment.with_values(environment.values.transform(key, fn)),
        f"transform {key.name}",
    )


_ROOT_ENVIRONMENT = Environment()

_CURRENT_ENVIRONMENT: ContextVar[Environment | None] = ContextVar(
    "izumi_ambient_environment",
    default=None,
)


def current_environment() -> Environment:
    """
    Get the environment of the view currently being evaluated.

    Outside of any evaluation this is the empty root environment.
    """
    environment = _CURRENT_ENVIRONMENT.get()
    return environment if environment is not None else _ROOT_ENVIRONMENT


def in_environment_scope() -> bool:
    """Check if a renderer is currently evaluating a view body."""
    return _CURRENT_ENVIRONMENT.get() is not None


@contextmanager
def environment_scope(environment: Environment) -> Iterator[Environment]:
    """Make ``environment`` current for the duration of the block."""
    token = _CURRENT_ENVIRONMENT.set(environment)
    try:
        yield environment
    finally:
        _CURRENT_ENVIRONMENT.reset(token)
