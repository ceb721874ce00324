"""Node representation for repository entries in the tree."""

from typing import Iterator, List, Optional

from repotree.types import NodeKind


class RepoTreeNode:
    """Node class representing a file or directory of a repository listing.

    A node exclusively owns its children: the parent holds the only reference to each
    child and children keep no back-pointer to their parent. Lookups by path go through
    the path-to-node mapping of the ``Forest`` that contains the node.

    Children are kept in insertion order, which carries no meaning of its own; display
    order is imposed on demand by ``repotree.tree_sorter``.

    Attributes:
        name (str): The final segment of ``path``.
        path (str): Slash-separated path relative to the repository root, unique in a forest.
        kind (NodeKind): Whether this node is a file or a directory.
        size (Optional[int]): Reported size in bytes; always None for directories.
        children (List[RepoTreeNode]): The child nodes. Always empty for files.

    Example:
        >>> root = RepoTreeNode("src", NodeKind.DIRECTORY)
        >>> root.add_child(RepoTreeNode("src/main.py", NodeKind.FILE, size=42))
        >>> [child.name for child in root.children]
        ['main.py']
        >>> root.is_dir, root.children[0].is_dir
        (True, False)
    """

    __slots__ = ("name", "path", "kind", "size", "children")

    def __init__(self, path: str, kind: NodeKind, size: Optional[int] = None) -> None:
        """Initialize a RepoTreeNode.

        Args:
            path: Slash-separated path of the entry.
            kind: Entry kind.
            size: Reported size in bytes. Ignored for directories.
        """
        self.path = path
        self.name = path.rsplit("/", 1)[-1]
        self.kind = kind
        self.size = size if kind is NodeKind.FILE else None
        self.children: List["RepoTreeNode"] = []

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    @property
    def parent_path(self) -> Optional[str]:
        if "/" not in self.path:
            return None
        return self.path.rsplit("/", 1)[0]

    def add_child(self, child: "RepoTreeNode") -> None:
        """Attach a child node.

        Raises:
            ValueError: If this node is a file.
        """
        if not self.is_dir:
            raise ValueError(f"Cannot add '{child.path}' beneath file '{self.path}'")
        self.children.append(child)

    def iter_subtree(self) -> Iterator["RepoTreeNode"]:
        """Yield this node and all of its descendants in pre-order (insertion order)."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def __repr__(self) -> str:
        size = f", size={self.size}" if self.size is not None else ""
        return f"RepoTreeNode(path={self.path!r}, kind={self.kind.value!r}{size})"
