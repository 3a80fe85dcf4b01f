# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-TreeSelect - Cascading tri-state selection for hierarchical data.

A lightweight library that tracks which nodes of a tree are selected,
indeterminate or expanded, for the Genro ecosystem (Genro Ky≈ç).
"""

__version__ = "0.1.0"

from .exceptions import (
    DuplicateNodeError,
    InvalidSourceError,
    TreeSelectError,
)
from .index import TreeIndex
from .loading import load_tree, load_tree_file
from .node import TreeNode
from .selection import SelectionEngine, compute_indeterminate
from .expansion import ExpansionEngine
from .tree import CHECKED, INDETERMINATE, UNCHECKED, TreeSelection, VisibleNode

__all__ = [
    # Core classes
    "TreeSelection",
    "TreeNode",
    "TreeIndex",
    "VisibleNode",
    # Engines
    "SelectionEngine",
    "ExpansionEngine",
    "compute_indeterminate",
    # Loading
    "load_tree",
    "load_tree_file",
    # Node states
    "CHECKED",
    "INDETERMINATE",
    "UNCHECKED",
    # Exceptions
    "TreeSelectError",
    "DuplicateNodeError",
    "InvalidSourceError",
]
