# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Expansion engine - expanded/collapsed tracking, independent of selection."""

from __future__ import annotations

import logging
from typing import Iterable

from .index import TreeIndex

logger = logging.getLogger(__name__)


class ExpansionEngine:
    """Owns the expanded id set. No cascading in either direction."""

    __slots__ = ('_index', '_expanded')

    def __init__(self, index: TreeIndex, initial_expanded: Iterable[str] = ()) -> None:
        self._index = index
        self._expanded: frozenset[str] = frozenset(initial_expanded)

    @property
    def expanded_ids(self) -> frozenset[str]:
        """Current expanded ids (snapshot)."""
        return self._expanded

    def rebind(self, index: TreeIndex) -> None:
        """Switch to a new index. Expanded ids are kept as they are."""
        self._index = index

    def is_expanded(self, node_id: str) -> bool:
        return node_id in self._expanded

    def toggle(self, node_id: str) -> None:
        """Flip the expansion of a node. Unknown ids are ignored."""
        if node_id not in self._index:
            logger.debug("toggle_expand(%r): unknown id, ignored", node_id)
            return
        self._expanded = self._expanded ^ {node_id}

    def expand_all(self) -> None:
        self._expanded = frozenset(self._index.all_ids())

    def collapse_all(self) -> None:
        self._expanded = frozenset()
