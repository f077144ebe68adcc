#!/usr/bin/env python3
"""
Unit tests for observable objects and bindings.
"""

import unittest

from izumi.ambient import Binding, ObjectWrapper, ObservableObject, Published


class Counter(ObservableObject):
    value = Published(0)
    label = Published("counter")


class Plain(ObservableObject):
    """Subclass that skips ObservableObject.__init__."""

    level = Published(1.0)

    def __init__(self) -> None:
        pass


class TestPublished(unittest.TestCase):
    """Test Published change notification."""

    def test_default_value(self):
        self.assertEqual(Counter().value, 0)
        self.assertIsInstance(Counter.value, Published)

    def test_assignment_notifies(self):
        counter = Counter()
        changes = []
        counter.subscribe(lambda source, attribute: changes.append((source, attribute)))

        counter.value = 3

        self.assertEqual(counter.value, 3)
        self.assertEqual(changes, [(counter, "value")])

    def test_equal_assignment_is_silent(self):
        counter = Counter()
        changes = []
        counter.subscribe(lambda source, attribute: changes.append(attribute))

        counter.value = 0

        self.assertEqual(changes, [])

    def test_instances_are_independent(self):
        first = Counter()
        second = Counter()
        first.value = 10
        self.assertEqual(second.value, 0)

    def test_cancelled_subscription_stops_notifications(self):
        counter = Counter()
        changes = []
        subscription = counter.subscribe(lambda source, attribute: changes.append(attribute))

        subscription.cancel()
        counter.value = 1

        self.assertEqual(changes, [])
        self.assertFalse(subscription.active)
        self.assertEqual(counter.subscriber_count(), 0)

    def test_cancel_twice(self):
        counter = Counter()
        subscription = counter.subscribe(lambda source, attribute: None)
        subscription.cancel()
        subscription.cancel()
        self.assertEqual(counter.subscriber_count(), 0)

    def test_subclass_without_super_init(self):
        plain = Plain()
        changes = []
        plain.subscribe(lambda source, attribute: changes.append(attribute))
        plain.level = 2.0
        self.assertEqual(changes, ["level"])


class TestBinding(unittest.TestCase):
    """Test bindings and object wrappers."""

    def test_binding_get_set(self):
        store = {"x": 1}
        binding = Binding(lambda: store["x"], lambda value: store.__setitem__("x", value))

        self.assertEqual(binding.get(), 1)
        binding.set(2)
        self.assertEqual(store["x"], 2)
        binding.value = 3
        self.assertEqual(binding.value, 3)

    def test_attribute_binding_notifies(self):
        """Writes through a binding go through Published and notify."""
        counter = Counter()
        changes = []
        counter.subscribe(lambda source, attribute: changes.append(attribute))

        binding = Binding.to_attribute(counter, "value")
        binding.value = 7

        self.assertEqual(counter.value, 7)
        self.assertEqual(changes, ["value"])
        self.assertEqual(repr(binding), "Binding(Counter.value)")

    def test_wrapper_is_read_only(self):
        wrapper = ObjectWrapper(Counter())
        with self.assertRaises(AttributeError):
            wrapper.value = 3  # type: ignore[misc]

    def test_wrapper_private_attributes(self):
        wrapper = ObjectWrapper(Counter())
        with self.assertRaises(AttributeError):
            wrapper._subscriptions  # noqa: B018


if __name__ == "__main__":
    unittest.main()
