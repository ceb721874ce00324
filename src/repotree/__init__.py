"""Repository listing to tree conversion utilities.

This package reconstructs a file/directory hierarchy from the flat path listing a
source-control hosting API returns, with exclusion filtering, missing-ancestor
synthesis, deterministic ordering, ancestor-visible search and plain-text rendering.
"""

from importlib.metadata import PackageNotFoundError, version

from repotree.exceptions import (
    DuplicatePathError,
    InconsistentTreeError,
    InvalidPathError,
    InvalidRecordError,
    InvalidRepositoryUrlError,
    RepoTreeError,
)
from repotree.exclusion_rules import FolderExclusionRules, is_excluded
from repotree.path_record import PathRecord, normalize_record
from repotree.repo_tree import Forest, RepoTreeNode, build_forest, build_repository_forest, synthesize_ancestors
from repotree.repository import RepoTree
from repotree.search_matcher import matches, visible_paths
from repotree.text_renderer import format_size, render
from repotree.tree_sorter import sorted_children
from repotree.types import NodeKind

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("repotree")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "DuplicatePathError",
    "FolderExclusionRules",
    "Forest",
    "InconsistentTreeError",
    "InvalidPathError",
    "InvalidRecordError",
    "InvalidRepositoryUrlError",
    "NodeKind",
    "PathRecord",
    "RepoTree",
    "RepoTreeError",
    "RepoTreeNode",
    "build_forest",
    "build_repository_forest",
    "format_size",
    "is_excluded",
    "matches",
    "normalize_record",
    "render",
    "sorted_children",
    "synthesize_ancestors",
    "visible_paths",
]
