"""
Providers: supply environment objects to a subtree.
"""

from __future__ import annotations

import logging
from typing import TypeVar

from .environment import Environment, EnvironmentTransform
from .keys import TypeKey
from .presence import _mark_present

T = TypeVar("T")

logger = logging.getLogger(__name__)


def _object_key(instance: object, as_type: type | None) -> TypeKey:
    if isinstance(instance, type):
        raise TypeError(f"Environment objects must be instances, got class {instance.__qualname__}")
    if as_type is None:
        return TypeKey.of_instance(instance)
    if not isinstance(instance, as_type):
        raise TypeError(f"{type(instance).__qualname__} instance cannot be provided as {as_type.__qualname__}")
    return TypeKey.of(as_type)


def environment_object(instance: T, *, as_type: type[T] | None = None) -> EnvironmentTransform:
    """
    Supply ``instance`` to the object table of a subtree, without marking it present.

    Objects supplied this way are reachable only through the raw
    ``EnvironmentObject`` accessor. Use ``optional_environment_object`` if
    descendants read it through ``OptionalEnvironmentObject``.
    """
    key = _object_key(instance, as_type)

    def apply(environment: Environment) -> Environment:
        return environment.with_objects(environment.objects.with_object(key, instance))

    return EnvironmentTransform(apply, f"environment_object({key})")


def optional_environment_object(instance: T, *, as_type: type[T] | None = None) -> EnvironmentTransform:
    """
    Supply ``instance`` to a subtree and mark its type as present.

    Args:
        instance: The shared object. Its lifetime is owned by the caller.
        as_type: Register under this type instead of ``type(instance)``.

    Returns:
        A transform registering the object and extending the presence set.
        Both channels are replaced in a single Environment, so descendants
        see either both writes or neither.

    Example:
        ```python
        ContentView().optional_environment_object(Model())
        ```
    """
    key = _object_key(instance, as_type)

    def apply(environment: Environment) -> Environment:
        values = _mark_present(environment.values, key)
        objects = environment.objects.with_object(key, instance)
        logger.debug("Providing %s to subtree", key)
        return Environment(values, objects)

    return EnvironmentTransform(apply, f"optional_environment_object({key})")
