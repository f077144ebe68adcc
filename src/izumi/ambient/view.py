"""
Views and view modifiers.

A view describes part of a tree: its ``body()`` returns child views, and
modifiers wrap it with an environment transform for its subtree. Views are
cheap descriptions; the renderer evaluates them.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, TypeVar, Union

from .binding import Binding, ObjectWrapper
from .consumer import EnvironmentObject, OptionalEnvironmentObject
from .environment import EnvironmentKey, EnvironmentTransform, set_value, transform_value
from .provider import environment_object, optional_environment_object

T = TypeVar("T")

ViewContent = Union["View", Sequence["View | None"], None]


class View:
    """Base class for every node of a view tree."""

    def body(self) -> ViewContent:
        """Return the child views. Primitive views are handled by the renderer instead."""
        raise NotImplementedError(f"{type(self).__qualname__} must implement body()")

    def modifier(self, transform: EnvironmentTransform) -> ModifiedView:
        """Apply an environment transform to this view's subtree."""
        return ModifiedView(self, transform)

    def environment_object(self, instance: T, *, as_type: type[T] | None = None) -> ModifiedView:
        """
        Supply an object to this subtree for EnvironmentObject accessors.

        The object is not recorded as present: OptionalEnvironmentObject
        accessors below still read None.
        """
        return self.modifier(environment_object(instance, as_type=as_type))

    def optional_environment_object(self, instance: T, *, as_type: type[T] | None = None) -> ModifiedView:
        """Supply an object to this subtree for both raw and optional accessors."""
        return self.modifier(optional_environment_object(instance, as_type=as_type))

    def environment(self, key: EnvironmentKey[T], value: T) -> ModifiedView:
        """Set a pure environment value for this subtree."""
        return self.modifier(set_value(key, value))

    def transform_environment(self, key: EnvironmentKey[T], fn: Callable[[T], T]) -> ModifiedView:
        """Rewrite a pure environment value for this subtree."""
        return self.modifier(transform_value(key, fn))

    def projected(self, name: str) -> ObjectWrapper[Any] | None:
        """
        Get the binding projection of an environment object declared on this view.

        Returns None when ``name`` is an OptionalEnvironmentObject whose type
        was never supplied.
        """
        accessor = getattr(type(self), name, None)
        if not isinstance(accessor, (EnvironmentObject, OptionalEnvironmentObject)):
            raise AttributeError(f"{type(self).__qualname__}.{name} is not an environment object accessor")
        return accessor.project()


class ModifiedView(View):
    """A view rendered with a transformed environment."""

    def __init__(self, content: View, transform: EnvironmentTransform):
        self.content = content
        self.transform = transform

    def body(self) -> ViewContent:
        return self.content

    def __repr__(self) -> str:
        return f"ModifiedView({self.content!r}, {self.transform.description})"


class EmptyView(View):
    """A view with no content."""

    def body(self) -> ViewContent:
        return None


class Text(View):
    """A text label."""

    def __init__(self, content: Any):
        self.content = str(content)

    def body(self) -> ViewContent:
        return None

    def __repr__(self) -> str:
        return f"Text({self.content!r})"


class Slider(View):
    """A control editing a numeric binding within bounds."""

    def __init__(self, value: Binding[float], bounds: tuple[float, float] = (0.0, 1.0)):
        low, high = bounds
        if low > high:
            raise ValueError(f"Slider bounds are inverted: {bounds}")
        self.binding = value
        self.bounds = bounds

    @property
    def value(self) -> float:
        return self.binding.get()

    def set(self, value: float) -> None:
        """Move the slider; the value is clamped to the bounds."""
        low, high = self.bounds
        self.binding.set(min(max(value, low), high))

    def body(self) -> ViewContent:
        return None

    def __repr__(self) -> str:
        return f"Slider({self.binding!r}, bounds={self.bounds})"


class VStack(View):
    """A vertical group of views."""

    def __init__(self, *children: View | None):
        self.children = [child for child in children if child is not None]

    def body(self) -> ViewContent:
        return self.children
