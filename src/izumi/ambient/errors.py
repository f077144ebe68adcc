"""
Exceptions raised by the ambient environment primitives.
"""

from __future__ import annotations

from .keys import TypeKey


class MissingEnvironmentObjectError(ValueError):
    """Raised when an environment object is read but no ancestor supplied it."""

    def __init__(self, key: TypeKey):
        self.key = key
        super().__init__(
            f"No environment object found for {key}. "
            f"A view ancestor must supply it with optional_environment_object() or environment_object()"
        )


class EnvironmentScopeError(RuntimeError):
    """Raised when an environment-bound property is accessed outside of a render pass."""


class ReadOnlyEnvironmentKeyError(ValueError):
    """Raised when a view modifier tries to write an environment key owned by the library."""
