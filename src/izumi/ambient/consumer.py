"""
Consumers: read environment objects from the current position of the tree.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar, cast, overload

from .binding import ObjectWrapper
from .environment import Environment, current_environment, in_environment_scope
from .errors import EnvironmentScopeError
from .keys import TypeKey
from .presence import is_present, read_presence

T = TypeVar("T")

logger = logging.getLogger(__name__)


class EnvironmentObject(Generic[T]):
    """
    Raw accessor for an environment object supplied by an ancestor.

    Reading it when no ancestor supplied the object raises
    MissingEnvironmentObjectError. Declare it as a class attribute of a view:

        class Counter(View):
            model = EnvironmentObject(Model)
    """

    def __init__(self, object_type: type[T]):
        self.object_type = object_type
        self.key = TypeKey.of(object_type)
        self.name: str | None = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    @overload
    def __get__(self, instance: None, owner: type | None = None) -> EnvironmentObject[T]: ...

    @overload
    def __get__(self, instance: object, owner: type | None = None) -> T: ...

    def __get__(self, instance: object | None, owner: type | None = None) -> EnvironmentObject[T] | T:
        if instance is None:
            return self
        return self.read()

    def __set__(self, instance: object, value: Any) -> None:
        raise AttributeError(f"{self.name} is supplied by the environment and cannot be assigned")

    def read(self, environment: Environment | None = None) -> T:
        """
        Get the object at the given position, or at the view being rendered.

        Raises:
            EnvironmentScopeError: If no environment is given outside of a render pass
            MissingEnvironmentObjectError: If no ancestor supplied the object
        """
        if environment is None:
            if not in_environment_scope():
                raise EnvironmentScopeError(f"{self.name or self.key} can only be read while a view is being rendered")
            environment = current_environment()
        if not environment.objects.has_key(self.key):
            logger.warning("Environment object %s requested but never supplied", self.key)
        return cast(T, environment.objects.get(self.key))

    def project(self, environment: Environment | None = None) -> ObjectWrapper[T]:
        """Get a wrapper producing bindings to the object's attributes."""
        return ObjectWrapper(self.read(environment))

    def __repr__(self) -> str:
        return f"EnvironmentObject({self.key})"


class OptionalEnvironmentObject(Generic[T]):
    """
    Accessor for an environment object that may not have been supplied.

    Unlike EnvironmentObject this yields None instead of raising when no
    ancestor supplied the object. Ancestors must use
    ``optional_environment_object`` (not ``environment_object``): only that
    modifier records the type in the presence set this accessor checks.

    Example:
        ```python
        class ContentView(View):
            model = OptionalEnvironmentObject(Model)

            def body(self):
                if self.model is None:
                    return Text("Not found")
                return Text(f"Found: {self.model.number}")
        ```
    """

    def __init__(self, object_type: type[T]):
        self.object_type = object_type
        self.key = TypeKey.of(object_type)
        self.name: str | None = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    @overload
    def __get__(self, instance: None, owner: type | None = None) -> OptionalEnvironmentObject[T]: ...

    @overload
    def __get__(self, instance: object, owner: type | None = None) -> T | None: ...

    def __get__(self, instance: object | None, owner: type | None = None) -> OptionalEnvironmentObject[T] | T | None:
        if instance is None:
            return self
        return self.read()

    def __set__(self, instance: object, value: Any) -> None:
        raise AttributeError(f"{self.name} is supplied by the environment and cannot be assigned")

    def is_present(self, environment: Environment | None = None) -> bool:
        """Check if an ancestor supplied the object."""
        environment = environment if environment is not None else current_environment()
        return is_present(environment, self.key)

    def read(self, environment: Environment | None = None) -> T | None:
        """Get the object at the current position, or None if it was never supplied."""
        environment = environment if environment is not None else current_environment()
        if self.key not in read_presence(environment):
            logger.debug("Environment object %s not present", self.key)
            return None
        # Presence implies the object table holds the key
        return cast(T, environment.objects.get(self.key))

    def project(self, environment: Environment | None = None) -> ObjectWrapper[T] | None:
        """Get a wrapper producing bindings to the object's attributes, or None."""
        environment = environment if environment is not None else current_environment()
        if self.key not in read_presence(environment):
            return None
        return ObjectWrapper(cast(T, environment.objects.get(self.key)))

    def __repr__(self) -> str:
        return f"OptionalEnvironmentObject({self.key})"
