# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeSelect exceptions."""

from __future__ import annotations


class TreeSelectError(Exception):
    """Base exception for TreeSelect errors."""

    pass


class DuplicateNodeError(TreeSelectError):
    """Raised in strict mode when a node id occurs more than once."""

    def __init__(self, node_id: str, parent_id: str | None = None) -> None:
        self.node_id = node_id
        self.parent_id = parent_id
        where = f"under '{parent_id}'" if parent_id is not None else "at root level"
        super().__init__(f"Duplicate node id '{node_id}' {where}")


class InvalidSourceError(TreeSelectError):
    """Raised when source data cannot be converted to tree nodes."""

    pass
