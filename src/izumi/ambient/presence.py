"""
Presence set: which environment object types some ancestor has supplied.

The presence set travels in the pure-value channel, which never fails on
read. It is the only information the optional consumer trusts before
touching the object table, so its key is private and read-only: the only
writer is the provider, which adds the object in the same step.
"""

from __future__ import annotations

from .environment import Environment, EnvironmentKey, EnvironmentValues
from .keys import TypeKey

PresenceSet = frozenset[TypeKey]

_PRESENCE_KEY: EnvironmentKey[PresenceSet] = EnvironmentKey(
    "environment_object_presence", frozenset(), read_only=True
)


def read_presence(environment: Environment | EnvironmentValues) -> PresenceSet:
    """Get the presence set visible at the given position."""
    values = environment.values if isinstance(environment, Environment) else environment
    return values.get(_PRESENCE_KEY)


def extend(presence: PresenceSet, key: TypeKey) -> PresenceSet:
    """Return ``presence`` with ``key`` added. The input set is not modified."""
    if key in presence:
        return presence
    return presence | {key}


def is_present(environment: Environment | EnvironmentValues, key: TypeKey) -> bool:
    """Check if ``key`` is in the presence set at the given position."""
    return key in read_presence(environment)


def _mark_present(values: EnvironmentValues, key: TypeKey) -> EnvironmentValues:
    return values._replace(_PRESENCE_KEY, extend(read_presence(values), key))
