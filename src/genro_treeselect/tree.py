# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeSelection - selection and expansion state for a rendered tree.

This module provides the TreeSelection class, the public surface of the
library. It combines a TreeIndex with a SelectionEngine and an
ExpansionEngine, and notifies subscribers when the selection changes.

Key Features:
    - **Cascading selection**: selecting a node selects its subtree and
      promotes its ancestors
    - **Tri-state queries**: is_selected / is_indeterminate per node
    - **Independent expansion**: toggle_expand, expand_all, collapse_all
    - **O(1) queries**: all state is precomputed by the mutating calls
    - **Change notification**: constructor callback plus named subscribers

Every mutating call computes a complete new state before any callback runs.
Query results are snapshots valid until the next mutating call.

Example:
    Basic usage::

        tree = TreeSelection([
            TreeNode('A', children=[
                TreeNode('B', children=[TreeNode('D'), TreeNode('E')]),
                TreeNode('C'),
            ]),
        ])
        tree.toggle_select('D', True)
        tree.selected_ids          # ['A', 'B', 'D']
        tree.is_indeterminate('B') # False, B was promoted

    Partial initial state::

        tree = TreeSelection(roots, initial_selected=['D'])
        tree.is_indeterminate('B') # True
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Iterator, NamedTuple, Sequence

from .expansion import ExpansionEngine
from .index import TreeIndex
from .loading import load_tree, load_tree_file
from .node import TreeNode
from .selection import SelectionEngine
from .subscription import SelectionCallback, SubscriptionMixin

logger = logging.getLogger(__name__)

CHECKED = 'checked'
UNCHECKED = 'unchecked'
INDETERMINATE = 'indeterminate'


class VisibleNode(NamedTuple):
    """One row of the rendered tree, as yielded by visible_nodes()."""

    node: TreeNode
    level: int
    selected: bool
    indeterminate: bool
    expanded: bool


class TreeSelection(SubscriptionMixin):
    """Selection and expansion state over a forest of TreeNode.

    TreeSelection provides:
    - toggle_select(id, selected): cascading selection change
    - select_all() / deselect_all(): bulk selection
    - toggle_expand(id), expand_all(), collapse_all(): expansion
    - is_selected / is_indeterminate / is_expanded: O(1) queries
    - get_selected_nodes(): selected TreeNode list

    Unknown ids never raise: queries answer False and mutations leave the
    state as it is.
    """

    __slots__ = (
        '_data', '_index', '_strict', '_selection', '_expansion',
        '_on_selection_change', '_subscribers',
    )

    def __init__(
        self,
        data: Sequence[TreeNode],
        initial_selected: Iterable[str] = (),
        initial_expanded: Iterable[str] = (),
        on_selection_change: SelectionCallback | None = None,
        strict: bool = False,
    ) -> None:
        """Initialize a TreeSelection.

        Args:
            data: Root nodes of the tree. The sequence is kept as given and
                compared by identity in set_data().
            initial_selected: Ids selected from the start, taken as given
                (no cascade). Parents with only some of their children in
                here start out indeterminate.
            initial_expanded: Ids expanded from the start.
            on_selection_change: Optional callback, called as
                callback(selected_ids, selected_nodes) after every operation
                that can change the selection.
            strict: If True, reject trees with repeated ids by raising
                DuplicateNodeError. If False (default), the last occurrence
                of a repeated id wins.

        Raises:
            TypeError: If data is not a sequence of TreeNode, an initial id
                argument is a single string, or the callback is not callable.
            DuplicateNodeError: In strict mode, on a repeated id.
        """
        _check_data(data)
        _check_ids('initial_selected', initial_selected)
        _check_ids('initial_expanded', initial_expanded)
        if on_selection_change is not None and not callable(on_selection_change):
            raise TypeError(
                f"on_selection_change must be callable, not {type(on_selection_change).__name__}"
            )
        self._data = data
        self._strict = strict
        self._index = TreeIndex(data, strict=strict)
        self._selection = SelectionEngine(self._index, initial_selected)
        self._expansion = ExpansionEngine(self._index, initial_expanded)
        self._on_selection_change = on_selection_change
        self._subscribers: dict[str, SelectionCallback] = {}

    @classmethod
    def from_source(cls, source: Sequence[Any] | dict[str, Any], **kwargs: Any) -> TreeSelection:
        """Create a TreeSelection from plain dict/list data (see load_tree)."""
        return cls(load_tree(source), **kwargs)

    @classmethod
    def from_file(cls, path: str | Path, **kwargs: Any) -> TreeSelection:
        """Create a TreeSelection from a JSON or YAML file (see load_tree_file)."""
        return cls(load_tree_file(path), **kwargs)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return (
            f"TreeSelection({self.total_count} nodes, "
            f"{self.selected_count} selected, {len(self._expansion.expanded_ids)} expanded)"
        )

    def __len__(self) -> int:
        """Return the number of nodes in the tree."""
        return len(self._index)

    def __contains__(self, node_id: object) -> bool:
        """Check if an id belongs to the current tree."""
        return node_id in self._index

    # ==================== Data ====================

    @property
    def data(self) -> Sequence[TreeNode]:
        """The root nodes currently indexed."""
        return self._data

    @property
    def index(self) -> TreeIndex:
        return self._index

    def set_data(self, data: Sequence[TreeNode]) -> None:
        """Replace the tree.

        The index is rebuilt only if ``data`` is a different object from the
        current one. Selected and expanded ids are kept; those missing from
        the new tree become inert. Indeterminate state is recomputed, no
        callback is fired.

        Raises:
            TypeError: If data is not a sequence of TreeNode.
            DuplicateNodeError: In strict mode, on a repeated id. The
                previous tree stays in place.
        """
        if data is self._data:
            return
        _check_data(data)
        index = TreeIndex(data, strict=self._strict)
        self._data = data
        self._index = index
        self._selection.rebind(index)
        self._expansion.rebind(index)
        logger.debug("Tree data replaced: %d nodes", len(index))

    # ==================== State Accessors ====================

    @property
    def selected_ids(self) -> list[str]:
        """Selected ids in tree order (stale ids last)."""
        return self._index.ordered(self._selection.selected_ids)

    @property
    def indeterminate_ids(self) -> list[str]:
        """Indeterminate ids in tree order."""
        return self._index.ordered(self._selection.indeterminate_ids)

    @property
    def expanded_ids(self) -> list[str]:
        """Expanded ids in tree order (stale ids last)."""
        return self._index.ordered(self._expansion.expanded_ids)

    @property
    def flat_node_map(self) -> dict[str, TreeNode]:
        return self._index.flat_node_map

    @property
    def parent_child_map(self) -> dict[str, list[str]]:
        return self._index.parent_child_map

    @property
    def child_parent_map(self) -> dict[str, str]:
        return self._index.child_parent_map

    @property
    def selected_count(self) -> int:
        """Number of selected nodes present in the tree."""
        return sum(1 for node_id in self._selection.selected_ids if node_id in self._index)

    @property
    def total_count(self) -> int:
        """Number of nodes in the tree."""
        return len(self._index)

    # ==================== Queries ====================
    # Stale ids answer False: they may sit in the state sets after
    # set_data() but belong to no node.

    def is_selected(self, node_id: str) -> bool:
        return self._selection.is_selected(node_id) and node_id in self._index

    def is_indeterminate(self, node_id: str) -> bool:
        return self._selection.is_indeterminate(node_id)

    def is_expanded(self, node_id: str) -> bool:
        return self._expansion.is_expanded(node_id) and node_id in self._index

    def node_state(self, node_id: str) -> str:
        """Return the checkbox state of a node.

        Returns:
            'checked', 'indeterminate' or 'unchecked'.
        """
        if self.is_selected(node_id):
            return CHECKED
        if self.is_indeterminate(node_id):
            return INDETERMINATE
        return UNCHECKED

    def get_selected_nodes(self) -> list[TreeNode]:
        """Return the selected nodes in tree order, skipping stale ids."""
        return self._index.nodes_for(self.selected_ids)

    # ==================== Selection ====================

    def toggle_select(self, node_id: str, selected: bool) -> None:
        """Select or deselect a node, cascading to descendants and ancestors.

        Selecting adds the node, its descendants and all its ancestors.
        Deselecting removes the node and its descendants, then removes each
        ancestor that has no selected child left.

        Args:
            node_id: The node to change. Unknown ids leave the selection as
                it is; subscribers are notified all the same.
            selected: True to select, False to deselect.
        """
        self._selection.toggle(node_id, selected)
        self._fire_selection()

    def select_all(self) -> None:
        """Select every node and notify."""
        self._selection.select_all()
        self._fire_selection()

    def deselect_all(self) -> None:
        """Clear the selection and notify."""
        self._selection.deselect_all()
        self._notify_selection([], [])

    def _fire_selection(self) -> None:
        selected_ids = self.selected_ids
        self._notify_selection(selected_ids, self._index.nodes_for(selected_ids))

    # ==================== Expansion ====================

    def toggle_expand(self, node_id: str) -> None:
        """Flip the expansion of a node. Unknown ids are ignored."""
        self._expansion.toggle(node_id)

    def expand_all(self) -> None:
        """Expand every node."""
        self._expansion.expand_all()

    def collapse_all(self) -> None:
        """Collapse every node."""
        self._expansion.collapse_all()

    # ==================== Rendering ====================

    def visible_nodes(self) -> Iterator[VisibleNode]:
        """Yield the rows to render, in display order.

        Roots are at level 0. The children of a node are yielded, one level
        deeper, only when the node is expanded.

        Example:
            >>> for row in tree.visible_nodes():
            ...     print('  ' * row.level, row.node.label, row.selected)
        """
        selection = self._selection
        expansion = self._expansion

        def _walk_gen(nodes: Sequence[TreeNode], level: int) -> Iterator[VisibleNode]:
            for node in nodes:
                expanded = expansion.is_expanded(node.id)
                yield VisibleNode(
                    node,
                    level,
                    selection.is_selected(node.id),
                    selection.is_indeterminate(node.id),
                    expanded,
                )
                if node.children and expanded:
                    yield from _walk_gen(node.children, level + 1)

        return _walk_gen(self._data, 0)


def _check_ids(name: str, ids: Any) -> None:
    """Raise TypeError if ids is a single string instead of a collection."""
    if isinstance(ids, (str, bytes)):
        raise TypeError(
            f"{name} must be a collection of ids, not {type(ids).__name__} "
            f"(use [{ids!r}] for a single id)"
        )


def _check_data(data: Any) -> None:
    """Raise TypeError unless data is a list or tuple of TreeNode."""
    if not isinstance(data, (list, tuple)):
        raise TypeError(
            f"data must be a list or tuple of TreeNode, not {type(data).__name__}"
        )
    for item in data:
        if not isinstance(item, TreeNode):
            raise TypeError(
                f"data must contain TreeNode, not {type(item).__name__} "
                "(use TreeSelection.from_source for plain data)"
            )
