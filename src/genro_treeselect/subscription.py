# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Selection change subscriptions.

Subscribers are registered under an id and called, in registration order,
after every operation that can change the selection. Each receives the
selected ids and the matching nodes:

    callback(selected_ids: list[str], selected_nodes: list[TreeNode])

Example:
    >>> tree.subscribe('toolbar', lambda ids, nodes: print(len(ids)))
    >>> tree.toggle_select('users', True)
    3
    >>> tree.unsubscribe('toolbar')
"""

from __future__ import annotations

from typing import Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from .node import TreeNode

SelectionCallback = Callable[[list[str], list['TreeNode']], None]


class SubscriptionMixin:
    """Mixin providing named selection-change subscribers.

    The host class must declare and set ``_subscribers`` (a dict) and
    ``_on_selection_change`` (a single callback invoked before the named
    subscribers, or None).
    """

    __slots__ = ()

    _subscribers: dict[str, SelectionCallback]
    _on_selection_change: SelectionCallback | None

    def subscribe(self, subscriber_id: str, callback: SelectionCallback) -> None:
        """Register a callback for selection changes.

        Args:
            subscriber_id: Key for later unsubscribe. Subscribing again with
                the same id replaces the previous callback.
            callback: Called as callback(selected_ids, selected_nodes).
        """
        if not callable(callback):
            raise TypeError(f"callback must be callable, not {type(callback).__name__}")
        self._subscribers.pop(subscriber_id, None)
        self._subscribers[subscriber_id] = callback

    def unsubscribe(self, subscriber_id: str) -> None:
        """Remove a subscriber. Unknown ids are ignored."""
        self._subscribers.pop(subscriber_id, None)

    def _notify_selection(self, selected_ids: list[str], selected_nodes: list[TreeNode]) -> None:
        """Call the constructor callback, then every subscriber."""
        if self._on_selection_change is not None:
            self._on_selection_change(list(selected_ids), list(selected_nodes))
        for callback in list(self._subscribers.values()):
            callback(list(selected_ids), list(selected_nodes))
