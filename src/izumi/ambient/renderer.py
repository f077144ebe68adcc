"""
Renderer and host: evaluate a view tree and keep it in sync with shared objects.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

from .environment import Environment, environment_scope
from .observable import ObservableObject, Subscription
from .view import ModifiedView, Slider, Text, View, ViewContent

logger = logging.getLogger(__name__)


@dataclass
class RenderNode:
    """One evaluated view."""

    kind: str
    view: View
    text: str | None = None
    value: Any = None
    children: list[RenderNode] = field(default_factory=list)

    def walk(self) -> Iterator[RenderNode]:
        """Iterate over this node and its descendants, depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def texts(self) -> list[str]:
        """All text labels in tree order."""
        return [node.text for node in self.walk() if node.text is not None]

    def find(self, kind: str) -> list[RenderNode]:
        """All nodes of the given kind in tree order."""
        return [node for node in self.walk() if node.kind == kind]


class Renderer:
    """
    Evaluates a view tree into RenderNodes.

    The environment is threaded explicitly down the recursion and made current
    only while a view's body() runs.
    """

    def __init__(self) -> None:
        self._observed: list[ObservableObject] = []

    @property
    def observed(self) -> list[ObservableObject]:
        """Observable objects supplied somewhere in the last rendered tree."""
        return list(self._observed)

    def render(self, view: View, environment: Environment | None = None) -> RenderNode:
        self._observed = []
        return self._render_node(view, environment if environment is not None else Environment.root())

    def _render_node(self, view: View, environment: Environment) -> RenderNode:
        if isinstance(view, ModifiedView):
            modified = view.transform(environment)
            self._observe(environment, modified)
            return self._render_node(view.content, modified)

        if isinstance(view, Text):
            return RenderNode("Text", view, text=view.content)

        if isinstance(view, Slider):
            return RenderNode("Slider", view, value=view.value)

        with environment_scope(environment):
            content = view.body()

        node = RenderNode(type(view).__name__, view)
        for child in self._children(content):
            node.children.append(self._render_node(child, environment))
        return node

    def _observe(self, parent: Environment, modified: Environment) -> None:
        for layer in modified.objects.layers_until(parent.objects):
            for instance in layer.local_values():
                if isinstance(instance, ObservableObject) and not any(instance is seen for seen in self._observed):
                    self._observed.append(instance)

    @staticmethod
    def _children(content: ViewContent) -> list[View]:
        if content is None:
            return []
        if isinstance(content, View):
            return [content]
        if isinstance(content, Sequence) and not isinstance(content, str):
            children: list[View] = []
            for child in content:
                if child is None:
                    continue
                if not isinstance(child, View):
                    raise TypeError(f"body() returned a non-view element: {child!r}")
                children.append(child)
            return children
        raise TypeError(f"body() must return a View, a sequence of views or None, got {content!r}")


class Host:
    """
    Owns a rendered tree and re-renders it when a supplied object changes.

    Args:
        root: The root view
        auto_render: Re-render immediately on change notifications. When
            False, changes only mark the host dirty until render() is called.
    """

    def __init__(self, root: View, *, renderer: Renderer | None = None, auto_render: bool = True):
        self.root = root
        self.auto_render = auto_render
        self._renderer = renderer if renderer is not None else Renderer()
        self._subscriptions: list[Subscription] = []
        self._tree: RenderNode | None = None
        self.dirty = True
        self.render_count = 0

    @property
    def tree(self) -> RenderNode:
        if self._tree is None:
            return self.render()
        return self._tree

    def render(self) -> RenderNode:
        """Evaluate the whole tree and resubscribe to the objects it supplies."""
        self._tree = self._renderer.render(self.root)
        self.render_count += 1
        self.dirty = False
        self._resubscribe(self._renderer.observed)
        logger.debug("Rendered %s (render #%d)", type(self.root).__name__, self.render_count)
        return self._tree

    def texts(self) -> list[str]:
        return self.tree.texts()

    def find(self, kind: str) -> list[RenderNode]:
        return self.tree.find(kind)

    def close(self) -> None:
        """Stop observing supplied objects."""
        for subscription in self._subscriptions:
            subscription.cancel()
        self._subscriptions = []

    def _resubscribe(self, observed: list[ObservableObject]) -> None:
        self.close()
        self._subscriptions = [instance.subscribe(self._on_change) for instance in observed]

    def _on_change(self, instance: ObservableObject, attribute: str) -> None:
        logger.debug("Invalidated by %s.%s", type(instance).__qualname__, attribute)
        self.dirty = True
        if self.auto_render:
            self.render()
