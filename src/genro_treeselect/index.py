# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeIndex - derived lookup maps over a forest of TreeNode.

The index is built once, in a single depth-first pass (parent before
children), and never changes afterwards. A new forest means a new index.

Maps:
    - **flat_node_map**: id -> TreeNode, every node in the forest
    - **parent_child_map**: parent id -> ordered direct child ids (leaves absent)
    - **child_parent_map**: child id -> parent id (roots absent)

Traversal:
    - descendants_of(id): pre-order, id excluded
    - ancestors_of(id): nearest ancestor first, up to the root

Example:
    >>> index = TreeIndex([TreeNode('a', children=[TreeNode('b')])])
    >>> index.descendants_of('a')
    ['b']
    >>> index.ancestors_of('b')
    ['a']
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Sequence

from .exceptions import DuplicateNodeError
from .node import TreeNode

logger = logging.getLogger(__name__)


class TreeIndex:
    """Read-only lookup structures for a forest of TreeNode.

    Unknown ids are never an error: traversals return empty lists and
    lookups return None.

    Attributes:
        roots: The root nodes the index was built from.
        flat_node_map: id -> TreeNode.
        parent_child_map: parent id -> list of direct child ids.
        child_parent_map: child id -> parent id.
    """

    __slots__ = (
        'roots', 'flat_node_map', 'parent_child_map', 'child_parent_map',
        '_position',
    )

    def __init__(self, roots: Sequence[TreeNode], strict: bool = False) -> None:
        """Build the index.

        Args:
            roots: Root nodes of the forest.
            strict: If True, raise DuplicateNodeError when an id occurs
                more than once. If False (default), the last occurrence wins
                in flat_node_map and child_parent_map.

        Raises:
            DuplicateNodeError: In strict mode, on a repeated id.
        """
        self.roots = list(roots)
        self.flat_node_map: dict[str, TreeNode] = {}
        self.parent_child_map: dict[str, list[str]] = {}
        self.child_parent_map: dict[str, str] = {}
        self._position: dict[str, int] = {}
        self._build(strict)
        logger.debug(
            "Built tree index: %d nodes, %d roots",
            len(self.flat_node_map), len(self.roots),
        )

    def _build(self, strict: bool) -> None:
        stack: list[tuple[TreeNode, str | None]] = [
            (node, None) for node in reversed(self.roots)
        ]
        while stack:
            node, parent_id = stack.pop()
            if node.id in self.flat_node_map:
                if strict:
                    raise DuplicateNodeError(node.id, parent_id)
                logger.warning("Duplicate node id %r, last occurrence wins", node.id)
            self.flat_node_map[node.id] = node
            self._position.setdefault(node.id, len(self._position))

            if parent_id is not None:
                siblings = self.parent_child_map.setdefault(parent_id, [])
                if node.id not in siblings:
                    siblings.append(node.id)
                self.child_parent_map[node.id] = parent_id

            for child in reversed(node.children):
                stack.append((child, node.id))

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"TreeIndex({len(self.flat_node_map)} nodes)"

    def __len__(self) -> int:
        return len(self.flat_node_map)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.flat_node_map

    def __iter__(self) -> Iterator[str]:
        """Iterate over all ids in pre-order."""
        return iter(self.flat_node_map)

    # ==================== Lookup ====================

    def get(self, node_id: str) -> TreeNode | None:
        """Return the node for an id, or None if unknown."""
        return self.flat_node_map.get(node_id)

    def children_of(self, node_id: str) -> list[str]:
        """Return the direct child ids of a node (empty for leaves/unknown)."""
        return list(self.parent_child_map.get(node_id, ()))

    def parent_of(self, node_id: str) -> str | None:
        """Return the parent id of a node, or None for roots/unknown."""
        return self.child_parent_map.get(node_id)

    def all_ids(self) -> list[str]:
        """Return every known id in pre-order."""
        return list(self.flat_node_map)

    # ==================== Traversal ====================

    def descendants_of(self, node_id: str) -> list[str]:
        """Return all descendant ids of a node in pre-order.

        The node itself is excluded. Unknown ids and leaves give an
        empty list.
        """
        result: list[str] = []
        seen = {node_id}
        stack = list(reversed(self.parent_child_map.get(node_id, ())))
        while stack:
            current = stack.pop()
            # A malformed tree can make an id its own descendant
            if current in seen:
                continue
            seen.add(current)
            result.append(current)
            stack.extend(reversed(self.parent_child_map.get(current, ())))
        return result

    def ancestors_of(self, node_id: str) -> list[str]:
        """Return all ancestor ids of a node, nearest first.

        Unknown ids and roots give an empty list.
        """
        result: list[str] = []
        seen = {node_id}
        current = self.child_parent_map.get(node_id)
        while current is not None and current not in seen:
            seen.add(current)
            result.append(current)
            current = self.child_parent_map.get(current)
        return result

    # ==================== Ordering ====================

    def ordered(self, ids: Iterable[str]) -> list[str]:
        """Return ids in tree pre-order.

        Ids absent from the index (stale ids) are kept and placed after the
        known ones, sorted.
        """
        known = []
        stale = []
        for node_id in ids:
            if node_id in self._position:
                known.append(node_id)
            else:
                stale.append(node_id)
        known.sort(key=self._position.__getitem__)
        stale.sort(key=str)
        return known + stale

    def nodes_for(self, ids: Iterable[str]) -> list[TreeNode]:
        """Map ids to nodes, silently dropping unknown ids."""
        return [
            self.flat_node_map[node_id]
            for node_id in ids
            if node_id in self.flat_node_map
        ]
