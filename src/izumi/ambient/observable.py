"""
Observable objects: shared state that announces its own changes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar, overload

T = TypeVar("T")

logger = logging.getLogger(__name__)

ChangeCallback = Callable[["ObservableObject", str], None]


class Subscription:
    """Handle returned by ObservableObject.subscribe; cancel() stops notifications."""

    def __init__(self, source: ObservableObject, callback: ChangeCallback):
        self._source = source
        self._callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if self._active:
            self._source._unsubscribe(self)
            self._active = False


class ObservableObject:
    """
    Base class for objects shared through the environment.

    Assigning a Published attribute notifies every subscriber with the object
    and the attribute name.
    """

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def subscribe(self, callback: ChangeCallback) -> Subscription:
        subscription = Subscription(self, callback)
        self._observers().append(subscription)
        return subscription

    def _unsubscribe(self, subscription: Subscription) -> None:
        observers = self._observers()
        if subscription in observers:
            observers.remove(subscription)

    def _observers(self) -> list[Subscription]:
        # Subclasses are not required to call super().__init__()
        try:
            return self.__dict__["_subscriptions"]  # type: ignore[no-any-return]
        except KeyError:
            observers: list[Subscription] = []
            self.__dict__["_subscriptions"] = observers
            return observers

    def subscriber_count(self) -> int:
        return len(self._observers())

    def notify_change(self, attribute: str) -> None:
        """Notify subscribers that ``attribute`` changed."""
        logger.debug("%s.%s changed", type(self).__qualname__, attribute)
        for subscription in list(self._observers()):
            if subscription.active:
                subscription._callback(self, attribute)


class Published(Generic[T]):
    """Descriptor for an ObservableObject attribute that notifies on change."""

    def __init__(self, default: T):
        self.default = default
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    @overload
    def __get__(self, instance: None, owner: type | None = None) -> Published[T]: ...

    @overload
    def __get__(self, instance: ObservableObject, owner: type | None = None) -> T: ...

    def __get__(self, instance: ObservableObject | None, owner: type | None = None) -> Published[T] | T:
        if instance is None:
            return self
        return instance.__dict__.get(self.name, self.default)  # type: ignore[no-any-return]

    def __set__(self, instance: ObservableObject, value: T) -> None:
        previous: Any = instance.__dict__.get(self.name, self.default)
        instance.__dict__[self.name] = value
        if previous != value:
            instance.notify_change(self.name)
