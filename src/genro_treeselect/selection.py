# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Selection engine - cascading tri-state selection over a TreeIndex.

Selecting a node selects its whole subtree and promotes every ancestor to
selected, whatever the state of the ancestor's other children. Deselecting a
node clears its subtree; an ancestor is cleared only when none of its direct
children remain selected.

Because of promotion, an ancestor of an interactively selected node is
always fully selected, never indeterminate. The indeterminate state only
shows for a parent that is not selected while some of its children are,
which in practice means a partial selection supplied as initial state.

Both sets are rebuilt as new objects on every change, so the selected and
indeterminate sets are always consistent with each other.
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Iterable

from .index import TreeIndex

logger = logging.getLogger(__name__)


def compute_indeterminate(index: TreeIndex, selected: AbstractSet[str]) -> set[str]:
    """Return the ids of the parents in a partial state.

    A parent is indeterminate when some, but not all, of its direct children
    are selected and the parent itself is not selected.

    Args:
        index: The tree index.
        selected: The selected ids.

    Returns:
        New set of indeterminate ids, disjoint from ``selected``.
    """
    result: set[str] = set()
    for parent_id, children in index.parent_child_map.items():
        if parent_id in selected:
            continue
        count = sum(1 for child_id in children if child_id in selected)
        if 0 < count < len(children):
            result.add(parent_id)
    return result


class SelectionEngine:
    """Owns the selected and indeterminate id sets.

    Example:
        >>> engine = SelectionEngine(index)
        >>> engine.toggle('D', True)
        >>> sorted(engine.selected_ids)
        ['A', 'B', 'D']
    """

    __slots__ = ('_index', '_selected', '_indeterminate')

    def __init__(self, index: TreeIndex, initial_selected: Iterable[str] = ()) -> None:
        """Initialize the engine.

        Args:
            index: The tree index to select over.
            initial_selected: Ids selected from the start. Taken as given,
                without cascading; a partial selection here is what makes
                parents indeterminate.
        """
        self._index = index
        self._selected: frozenset[str] = frozenset(initial_selected)
        self._indeterminate: frozenset[str] = frozenset(
            compute_indeterminate(index, self._selected)
        )

    @property
    def index(self) -> TreeIndex:
        return self._index

    @property
    def selected_ids(self) -> frozenset[str]:
        """Current selected ids (snapshot)."""
        return self._selected

    @property
    def indeterminate_ids(self) -> frozenset[str]:
        """Current indeterminate ids (snapshot)."""
        return self._indeterminate

    def rebind(self, index: TreeIndex) -> None:
        """Switch to a new index, keeping the selected ids.

        Ids no longer in the index stay in the selected set but are inert.
        Indeterminate state is recomputed against the new index.
        """
        self._index = index
        self._indeterminate = frozenset(compute_indeterminate(index, self._selected))

    # ==================== Queries ====================

    def is_selected(self, node_id: str) -> bool:
        return node_id in self._selected

    def is_indeterminate(self, node_id: str) -> bool:
        return node_id in self._indeterminate

    # ==================== Mutations ====================

    def toggle(self, node_id: str, selected: bool) -> None:
        """Select or deselect a node with cascade to descendants and ancestors.

        An id unknown to the index leaves the selected set unchanged; the
        indeterminate set is still recomputed.

        Args:
            node_id: The node to change.
            selected: True to select, False to deselect.
        """
        index = self._index
        new_selected = set(self._selected)

        if node_id not in index:
            logger.debug("toggle(%r): unknown id, selection unchanged", node_id)
        else:
            subtree = [node_id, *index.descendants_of(node_id)]
            if selected:
                new_selected.update(subtree)
            else:
                new_selected.difference_update(subtree)

            # Nearest first: a cleared parent is already gone when its own
            # parent checks for remaining children.
            for ancestor_id in index.ancestors_of(node_id):
                if selected:
                    new_selected.add(ancestor_id)
                elif not any(
                    child_id in new_selected
                    for child_id in index.parent_child_map.get(ancestor_id, ())
                ):
                    new_selected.discard(ancestor_id)

        self._set(new_selected, compute_indeterminate(index, new_selected))
        logger.debug(
            "toggle(%r, %s): %d selected, %d indeterminate",
            node_id, selected, len(self._selected), len(self._indeterminate),
        )

    def select_all(self) -> None:
        """Select every node in the index."""
        self._set(set(self._index.all_ids()), set())
        logger.debug("select_all: %d selected", len(self._selected))

    def deselect_all(self) -> None:
        """Clear the selection."""
        self._set(set(), set())
        logger.debug("deselect_all")

    def _set(self, selected: set[str], indeterminate: set[str]) -> None:
        self._selected = frozenset(selected)
        self._indeterminate = frozenset(indeterminate)
