"""Repository tree reconstruction from flat listings.

This package turns a flat list of repository records into a forest of nodes: records
are filtered by exclusion rules, completed with their implied ancestor directories,
and assembled into a parent/child hierarchy.
"""

from .ancestor_synthesizer import implied_directories, synthesize_ancestors
from .forest import Forest
from .repo_tree_node import RepoTreeNode
from .tree_builder import build_forest, build_repository_forest

__all__ = [
    "Forest",
    "RepoTreeNode",
    "build_forest",
    "build_repository_forest",
    "implied_directories",
    "synthesize_ancestors",
]
