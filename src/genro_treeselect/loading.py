# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Loading functions - build TreeNode forests from plain data.

Accepted sources:
    - list of dicts: one dict per root node
    - dict: a single root node
    - list/tuple of TreeNode: returned as a list, unchanged
    - .json / .yaml / .yml files via load_tree_file()

Node dict keys:
    - id (required): node identifier, converted to str
    - label: display text, defaults to the id
    - children: list of node dicts
    - disabled: bool
    - metadata: dict
    Any other key is folded into metadata.

Example:
    >>> roots = load_tree([
    ...     {'id': 'users', 'label': 'Users', 'children': [
    ...         {'id': 'users.read', 'label': 'Read'},
    ...     ]},
    ... ])
    >>> roots[0].children[0].id
    'users.read'
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Sequence

import yaml

from .exceptions import InvalidSourceError
from .node import TreeNode

logger = logging.getLogger(__name__)

_NODE_KEYS = frozenset({'id', 'label', 'children', 'disabled', 'metadata'})


def load_tree(source: Sequence[Any] | dict[str, Any]) -> list[TreeNode]:
    """Build a list of root TreeNode from source data.

    Args:
        source: A list of node dicts or TreeNode, or a single node dict.

    Returns:
        List of root nodes.

    Raises:
        InvalidSourceError: If the source or one of its nodes is malformed.
    """
    if isinstance(source, dict):
        return [load_node(source)]
    if isinstance(source, (list, tuple)):
        return [
            item if isinstance(item, TreeNode) else load_node(item)
            for item in source
        ]
    raise InvalidSourceError(
        f"source must be list, tuple or dict, not {type(source).__name__}"
    )


def load_node(data: dict[str, Any], _path: str = '') -> TreeNode:
    """Build a TreeNode (recursively) from a node dict.

    Args:
        data: The node dict.
        _path: Internal use for error messages.

    Raises:
        InvalidSourceError: If data is not a dict or has no id, or if its
            children, metadata or disabled flag have the wrong type.
    """
    if not isinstance(data, dict):
        raise InvalidSourceError(
            f"node{' at ' + _path if _path else ''} must be a dict, "
            f"not {type(data).__name__}"
        )
    if data.get('id') is None:
        raise InvalidSourceError(
            f"node{' at ' + _path if _path else ''} has no 'id'"
        )

    node_id = str(data['id'])
    path = f"{_path}/{node_id}" if _path else node_id

    children_data = data.get('children') or []
    if not isinstance(children_data, (list, tuple)):
        raise InvalidSourceError(
            f"children of '{path}' must be a list, not {type(children_data).__name__}"
        )

    metadata = data.get('metadata') or {}
    if not isinstance(metadata, dict):
        raise InvalidSourceError(
            f"metadata of '{path}' must be a dict, not {type(metadata).__name__}"
        )
    extra = {k: v for k, v in data.items() if k not in _NODE_KEYS}
    if extra:
        metadata = {**metadata, **extra}

    disabled = data.get('disabled')
    if disabled is None:
        disabled = False
    if not isinstance(disabled, bool):
        raise InvalidSourceError(
            f"disabled of '{path}' must be a bool, not {type(disabled).__name__}"
        )

    label = data.get('label')
    return TreeNode(
        node_id,
        label=None if label is None else str(label),
        children=[load_node(child, path) for child in children_data],
        disabled=disabled,
        metadata=metadata,
    )


def load_tree_file(path: str | Path) -> list[TreeNode]:
    """Read a tree from a JSON or YAML file.

    The file holds either a list of root node dicts or a single root dict.

    Args:
        path: File path with suffix .json, .yaml or .yml.

    Raises:
        InvalidSourceError: On an unsupported suffix or malformed content.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    try:
        text = path.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise InvalidSourceError(f"cannot decode {path}: {e}") from e

    if suffix == '.json':
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidSourceError(f"invalid JSON in {path}: {e}") from e
    elif suffix in ('.yaml', '.yml'):
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise InvalidSourceError(f"invalid YAML in {path}: {e}") from e
    else:
        raise InvalidSourceError(f"unsupported tree file type '{suffix}': {path}")

    if data is None:
        data = []
    roots = load_tree(data)
    logger.debug("Loaded %d root nodes from %s", len(roots), path)
    return roots
