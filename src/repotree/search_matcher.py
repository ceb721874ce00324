"""Incremental search over a built forest.

A node is visible for a search term if its own name contains the term
(case-insensitively) or if any of its descendants does. Directories therefore stay
visible while anything beneath them matches, even when their own name does not.

Nothing is cached: the forest is immutable between rebuilds, so each query simply
walks the relevant subtree again.
"""

from typing import Iterable, List, Optional, Set, Tuple, Union

from repotree.repo_tree.forest import Forest
from repotree.repo_tree.repo_tree_node import RepoTreeNode


def _needle(term: object) -> Optional[str]:
    # Empty, absent or non-string terms have no filtering effect.
    if not isinstance(term, str) or not term:
        return None
    return term.casefold()


def matches(node: RepoTreeNode, term: Optional[str]) -> bool:
    """Check whether a node, or any of its descendants, matches a search term.

    Args:
        node: Node to test.
        term: Search term. Empty or None matches everything.

    Returns:
        True if the node should be visible for this term.

    Example:
        >>> from repotree.repo_tree.tree_builder import build_forest
        >>> from repotree.path_record import normalize_record
        >>> forest = build_forest([
        ...     normalize_record("a", "dir"),
        ...     normalize_record("a/b.txt", "file"),
        ...     normalize_record("a/c", "dir"),
        ...     normalize_record("a/c/d.txt", "file"),
        ... ])
        >>> matches(forest["a"], "D.TXT"), matches(forest["a/b.txt"], "d.txt")
        (True, False)
        >>> matches(forest["a/b.txt"], "")
        True
    """
    needle = _needle(term)
    if needle is None:
        return True
    return _matches(node, needle)


def _matches(node: RepoTreeNode, needle: str) -> bool:
    stack = [node]
    while stack:
        current = stack.pop()
        if needle in current.name.casefold():
            return True
        stack.extend(current.children)
    return False


def _collect_visible(root: RepoTreeNode, needle: str, visible: Set[str]) -> bool:
    # Post-order: a node's verdict is recorded once all of its children have one.
    stack: List[Tuple[RepoTreeNode, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if not expanded:
            stack.append((node, True))
            stack.extend((child, False) for child in node.children)
        elif needle in node.name.casefold() or any(child.path in visible for child in node.children):
            visible.add(node.path)
    return root.path in visible


def visible_paths(source: Union[Forest, RepoTreeNode, Iterable[RepoTreeNode]], term: Optional[str]) -> Set[str]:
    """Collect the paths of every visible node in a single traversal.

    Args:
        source: A forest, a single subtree root, or an iterable of subtree roots.
        term: Search term. Empty or None makes every node visible.

    Returns:
        The set of visible node paths.
    """
    if isinstance(source, Forest):
        roots: Iterable[RepoTreeNode] = source.roots
    elif isinstance(source, RepoTreeNode):
        roots = [source]
    else:
        roots = source

    visible: Set[str] = set()
    needle = _needle(term)
    for root in roots:
        if needle is None:
            visible.update(node.path for node in root.iter_subtree())
        else:
            _collect_visible(root, needle, visible)
    return visible
