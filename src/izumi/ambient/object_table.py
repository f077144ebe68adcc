"""
Ambient object table: the raw, fail-on-absent injection primitive.

An ObjectTable is a chain of immutable layers. Each provision in the view tree
adds a layer on top of the table inherited from the parent, so lookups find
the innermost (closest ancestor) instance first.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from .errors import MissingEnvironmentObjectError
from .keys import TypeKey


class ObjectTable(ABC):
    """
    Abstract interface for ambient object tables.

    The table is the unsafe half of the environment: ``get`` raises
    MissingEnvironmentObjectError for keys that were never supplied.
    """

    @abstractmethod
    def has_key_locally(self, key: TypeKey) -> bool:
        """Check if this layer holds the key."""

    @abstractmethod
    def has_key(self, key: TypeKey) -> bool:
        """Check if this layer (or its parent chain) holds the key."""

    @abstractmethod
    def is_empty(self) -> bool:
        """Check if this is the empty root table."""

    @abstractmethod
    def get(self, key: TypeKey) -> object:
        """
        Get the innermost object registered for the key.

        Raises:
            MissingEnvironmentObjectError: If no layer holds the key
        """

    @abstractmethod
    def local_values(self) -> tuple[object, ...]:
        """Objects registered by this layer only."""

    @property
    @abstractmethod
    def parent(self) -> ObjectTable | None:
        """Get the parent table, if any."""

    def with_object(self, key: TypeKey, instance: object) -> ObjectTable:
        """
        Create a child table that registers ``instance`` under ``key``.

        The receiver is left untouched; the new layer shadows any instance
        registered for the same key further up the chain.
        """
        return ObjectTableImpl({key: instance}, self)

    def layers_until(self, ancestor: ObjectTable) -> Iterator[ObjectTable]:
        """
        Iterate over the layers stacked on top of ``ancestor``, innermost first.

        Stops at the empty root when ``ancestor`` is not part of the chain.
        """
        table: ObjectTable | None = self
        while table is not None and table is not ancestor and not table.is_empty():
            yield table
            table = table.parent

    @staticmethod
    def empty() -> ObjectTable:
        """Get the empty root table."""
        return ObjectTableEmpty.instance()


class ObjectTableEmpty(ObjectTable):
    """
    Empty table holding no objects.

    This is a singleton that serves as the root of every table chain.
    """

    _instance: ObjectTableEmpty | None = None

    def __init__(self) -> None:
        """Private constructor - use instance() instead."""
        if ObjectTableEmpty._instance is not None:
            raise RuntimeError("ObjectTableEmpty is a singleton - use instance() method")

    @classmethod
    def instance(cls) -> ObjectTableEmpty:
        """Get the singleton empty table."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def has_key_locally(self, key: TypeKey) -> bool:  # noqa: ARG002
        """Empty table has no keys locally."""
        return False

    def has_key(self, key: TypeKey) -> bool:  # noqa: ARG002
        """Empty table has no keys."""
        return False

    def is_empty(self) -> bool:
        """Empty table is always empty."""
        return True

    def get(self, key: TypeKey) -> object:
        """Empty table cannot provide any objects."""
        raise MissingEnvironmentObjectError(key)

    def local_values(self) -> tuple[object, ...]:
        """Empty table registers nothing."""
        return ()

    @property
    def parent(self) -> ObjectTable | None:
        """Empty table has no parent."""
        return None

    def __repr__(self) -> str:
        return "ObjectTableEmpty()"


class ObjectTableImpl(ObjectTable):
    """One layer of provided objects on top of a parent table."""

    def __init__(self, objects: Mapping[TypeKey, object], parent: ObjectTable):
        self._objects: Mapping[TypeKey, object] = MappingProxyType(dict(objects))
        self._parent = parent

    def has_key_locally(self, key: TypeKey) -> bool:
        return key in self._objects

    def has_key(self, key: TypeKey) -> bool:
        return self.has_key_locally(key) or self._parent.has_key(key)

    def is_empty(self) -> bool:
        return False

    def get(self, key: TypeKey) -> object:
        if key in self._objects:
            return self._objects[key]
        return self._parent.get(key)

    def local_values(self) -> tuple[object, ...]:
        return tuple(self._objects.values())

    @property
    def parent(self) -> ObjectTable | None:
        return self._parent if not self._parent.is_empty() else None

    def __repr__(self) -> str:
        local = ", ".join(str(key) for key in self._objects)
        return f"ObjectTableImpl([{local}], parent={self._parent!r})"
