# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeNode - the value type handed to the selection engine."""

from __future__ import annotations

from typing import Any


class TreeNode:
    """A node in a selectable hierarchy.

    Each node has:
    - id: Identifier, unique across the whole tree
    - label: Display text
    - children: Ordered list of child TreeNode (empty for leaves)
    - disabled: Hint for the rendering layer; the engine ignores it
    - metadata: Opaque dictionary owned by the caller

    The engine only reads nodes, it never changes them.

    Example:
        >>> node = TreeNode('users', 'Users', children=[TreeNode('users.read')])
        >>> node.has_children
        True
        >>> node.children[0].label
        'users.read'
    """

    __slots__ = ('id', 'label', 'children', 'disabled', 'metadata')

    def __init__(
        self,
        id: str,
        label: str | None = None,
        children: list[TreeNode] | None = None,
        disabled: bool = False,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Initialize a TreeNode.

        Args:
            id: The node's unique identifier.
            label: Display text. Defaults to the id.
            children: Optional list of child nodes.
            disabled: True if the node should be rendered as not selectable.
            metadata: Optional dictionary of caller data.
        """
        self.id = id
        self.label = id if label is None else label
        self.children = children if children is not None else []
        self.disabled = disabled
        self.metadata = metadata or {}

    def __repr__(self) -> str:
        return f"TreeNode({self.id!r}, label={self.label!r}, children={len(self.children)})"

    @property
    def has_children(self) -> bool:
        """True if this node has at least one child."""
        return len(self.children) > 0

    @property
    def is_leaf(self) -> bool:
        """True if this node has no children."""
        return not self.children

    def get_meta(self, key: str | None = None, default: Any = None) -> Any:
        """Get a metadata value or the whole metadata dict.

        Args:
            key: Metadata key. If None, returns all metadata.
            default: Default value if key not found.
        """
        if key is None:
            return self.metadata
        return self.metadata.get(key, default)

    def as_dict(self) -> dict[str, Any]:
        """Convert to the plain dict form accepted by ``load_tree`` (recursive)."""
        result: dict[str, Any] = {'id': self.id, 'label': self.label}
        if self.children:
            result['children'] = [child.as_dict() for child in self.children]
        if self.disabled:
            result['disabled'] = True
        if self.metadata:
            result['metadata'] = dict(self.metadata)
        return result
