"""
Chibi Ambient - optional environment objects for tree-shaped view hierarchies.

A view may ask for a shared object supplied by some ancestor and receive None,
instead of an error, when no ancestor supplied one:

- optional_environment_object() supplies an object to a subtree and records
  its type in the presence set
- OptionalEnvironmentObject reads the presence set first and only touches
  the object table when the type is present
- EnvironmentObject is the raw accessor that raises when the object is absent
"""

from .binding import Binding, ObjectWrapper
from .consumer import EnvironmentObject, OptionalEnvironmentObject
from .environment import (
    Environment,
    EnvironmentKey,
    EnvironmentTransform,
    EnvironmentValues,
    current_environment,
    environment_scope,
)
from .errors import EnvironmentScopeError, MissingEnvironmentObjectError, ReadOnlyEnvironmentKeyError
from .keys import TypeKey
from .object_table import ObjectTable
from .observable import ObservableObject, Published, Subscription
from .presence import PresenceSet, extend, read_presence
from .provider import environment_object, optional_environment_object
from .renderer import Host, RenderNode, Renderer
from .view import EmptyView, ModifiedView, Slider, Text, View, VStack

__all__ = [
    "Binding",
    "EmptyView",
    "Environment",
    "EnvironmentKey",
    "EnvironmentObject",
    "EnvironmentScopeError",
    "EnvironmentTransform",
    "EnvironmentValues",
    "Host",
    "MissingEnvironmentObjectError",
    "ModifiedView",
    "ObjectTable",
    "ObjectWrapper",
    "ObservableObject",
    "OptionalEnvironmentObject",
    "PresenceSet",
    "Published",
    "ReadOnlyEnvironmentKeyError",
    "RenderNode",
    "Renderer",
    "Slider",
    "Subscription",
    "Text",
    "TypeKey",
    "VStack",
    "View",
    "current_environment",
    "environment_object",
    "environment_scope",
    "extend",
    "optional_environment_object",
    "read_presence",
]
