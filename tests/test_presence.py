#!/usr/bin/env python3
"""
Unit tests for environment values and the presence set.
"""

import unittest

import izumi.ambient
from izumi.ambient import (
    Environment,
    EnvironmentKey,
    EnvironmentValues,
    ReadOnlyEnvironmentKeyError,
    TypeKey,
    current_environment,
    environment_scope,
    extend,
    read_presence,
)
from izumi.ambient.environment import in_environment_scope, set_value, transform_value
from izumi.ambient.presence import _PRESENCE_KEY


class Model:
    pass


class Settings:
    pass


class TestEnvironmentValues(unittest.TestCase):
    """Test the pure-value environment channel."""

    def test_read_only_keys_are_rejected(self):
        """Read-only keys cannot be written through the public API."""
        key = EnvironmentKey("owned", 0, read_only=True)
        self.assertEqual(EnvironmentValues().get(key), 0)
        with self.assertRaises(ReadOnlyEnvironmentKeyError):
            set_value(key, 1)
        with self.assertRaises(ReadOnlyEnvironmentKeyError):
            transform_value(key, lambda value: value + 1)
        with self.assertRaises(ReadOnlyEnvironmentKeyError):
            EnvironmentValues().set(key, 1)
        self.assertIsInstance(ReadOnlyEnvironmentKeyError("x"), ValueError)

    def test_missing_key_yields_default(self):
        """Reading an unset key never fails."""
        key = EnvironmentKey("font_size", 12)
        self.assertEqual(EnvironmentValues().get(key), 12)
        self.assertFalse(EnvironmentValues().contains(key))

    def test_set_returns_copy(self):
        """set() leaves the receiver unchanged."""
        key = EnvironmentKey("font_size", 12)
        original = EnvironmentValues()
        updated = original.set(key, 18)

        self.assertEqual(original.get(key), 12)
        self.assertEqual(updated.get(key), 18)
        self.assertEqual(len(updated), 1)
        self.assertEqual(list(updated), [key])

    def test_transform_starts_from_default(self):
        """transform() applies to the default when the key was never set."""
        key = EnvironmentKey("depth", 0)
        values = EnvironmentValues().transform(key, lambda depth: depth + 1).transform(key, lambda depth: depth + 1)
        self.assertEqual(values.get(key), 2)

    def test_keys_compare_by_identity(self):
        """Keys with the same name are distinct entries."""
        first = EnvironmentKey("name", "a")
        second = EnvironmentKey("name", "b")
        values = EnvironmentValues().set(first, "x")
        self.assertEqual(values.get(first), "x")
        self.assertEqual(values.get(second), "b")

    def test_transforms(self):
        """set_value and transform_value produce new environments."""
        key = EnvironmentKey("depth", 0)
        environment = Environment.root()
        changed = transform_value(key, lambda depth: depth + 5)(set_value(key, 1)(environment))

        self.assertEqual(environment.get(key), 0)
        self.assertEqual(changed.get(key), 6)
        self.assertIs(changed.objects, environment.objects)

    def test_transform_composition(self):
        """then() runs the receiver first."""
        key = EnvironmentKey("trail", "")
        composed = transform_value(key, lambda trail: trail + "a").then(transform_value(key, lambda trail: trail + "b"))
        self.assertEqual(composed(Environment.root()).get(key), "ab")
        self.assertIn("transform trail", composed.description)


class TestPresenceSet(unittest.TestCase):
    """Test presence set propagation."""

    def test_empty_at_root(self):
        """No type is present before any provider runs."""
        self.assertEqual(read_presence(Environment.root()), frozenset())
        self.assertEqual(read_presence(EnvironmentValues()), frozenset())

    def test_extend_adds_key(self):
        """extend() returns the union."""
        presence = extend(frozenset(), TypeKey.of(Model))
        self.assertEqual(presence, frozenset({TypeKey.of(Model)}))

    def test_extend_does_not_mutate_input(self):
        """The input set is left untouched."""
        original = frozenset({TypeKey.of(Model)})
        extended = extend(original, TypeKey.of(Settings))

        self.assertEqual(original, frozenset({TypeKey.of(Model)}))
        self.assertEqual(extended, frozenset({TypeKey.of(Model), TypeKey.of(Settings)}))

    def test_extend_is_idempotent(self):
        """Adding a member twice leaves the set unchanged."""
        once = extend(frozenset(), TypeKey.of(Model))
        twice = extend(once, TypeKey.of(Model))
        self.assertEqual(once, twice)

    def test_presence_key_is_private(self):
        """The presence key is not part of the public API and is read-only."""
        self.assertFalse(hasattr(izumi.ambient, "PRESENCE_KEY"))
        self.assertNotIn("PRESENCE_KEY", izumi.ambient.__all__)
        self.assertTrue(_PRESENCE_KEY.read_only)
        self.assertEqual(_PRESENCE_KEY.default, frozenset())

    def test_presence_key_cannot_be_written(self):
        """Neither forging nor shrinking the presence set is possible."""
        forged = frozenset({TypeKey.of(Model)})
        with self.assertRaises(ReadOnlyEnvironmentKeyError):
            set_value(_PRESENCE_KEY, forged)
        with self.assertRaises(ReadOnlyEnvironmentKeyError):
            transform_value(_PRESENCE_KEY, lambda presence: frozenset())
        with self.assertRaises(ReadOnlyEnvironmentKeyError):
            EnvironmentValues().set(_PRESENCE_KEY, forged)
        with self.assertRaises(ReadOnlyEnvironmentKeyError):
            EnvironmentValues().transform(_PRESENCE_KEY, lambda presence: presence | forged)


class TestEnvironmentScope(unittest.TestCase):
    """Test the per-evaluation current environment."""

    def test_root_environment_outside_scope(self):
        """Outside a render pass the current environment is empty."""
        self.assertFalse(in_environment_scope())
        self.assertEqual(read_presence(current_environment()), frozenset())

    def test_scope_is_restored(self):
        """Nested scopes restore the enclosing environment on exit."""
        key = EnvironmentKey("level", 0)
        outer = set_value(key, 1)(Environment.root())
        inner = set_value(key, 2)(outer)

        with environment_scope(outer):
            self.assertTrue(in_environment_scope())
            self.assertEqual(current_environment().get(key), 1)
            with environment_scope(inner):
                self.assertEqual(current_environment().get(key), 2)
            self.assertEqual(current_environment().get(key), 1)

        self.assertFalse(in_environment_scope())

    def test_scope_is_restored_after_error(self):
        """An exception inside the block still resets the scope."""
        with self.assertRaises(RuntimeError):
            with environment_scope(Environment.root()):
                raise RuntimeError("boom")
        self.assertFalse(in_environment_scope())


if __name__ == "__main__":
    unittest.main()
