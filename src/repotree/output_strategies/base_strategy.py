"""Output strategy base class defining the interface for forest export formats.

This module provides the abstract base class that defines how a built forest is
serialized for export. Every strategy walks the forest in display order and honours an
optional search term, so exports always show the same nodes as the interactive view.
"""

from abc import ABC, abstractmethod
from typing import Iterator, Optional

from repotree.repo_tree.forest import Forest


class OutputStrategy(ABC):
    """Abstract base class defining the interface for forest export strategies.

    This class implements the Strategy pattern for serializing a forest in different
    formats (e.g., plain-text tree, JSON). Output is produced as a stream of chunks so
    callers can write it incrementally.

    Example:
        >>> class PathListStrategy(OutputStrategy):
        ...     def format_forest(self, forest, search_term=None):
        ...         for node in forest:
        ...             yield node.path + "\\n"
        ...
        ...     def get_file_extension(self) -> str:
        ...         return ".lst"
    """

    @abstractmethod
    def format_forest(self, forest: Forest, search_term: Optional[str] = None) -> Iterator[str]:
        """Serialize a forest.

        Args:
            forest: The forest to serialize.
            search_term: Optional search term; only visible nodes are serialized.

        Yields:
            Chunks of output which, concatenated, form the complete document.
        """
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get the appropriate file extension for this output format.

        Returns:
            The file extension including the leading dot (e.g., ".txt", ".json").
        """
        pass
