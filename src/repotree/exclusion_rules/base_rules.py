from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence, Union

from repotree.path_record import PathRecord
from repotree.types import PathType


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for path exclusion rules.

    Exclusion rules decide which flat records are dropped before a tree is assembled.
    Every implementation answers ``exclude`` for a bare path; rules that need more than
    the path (for example a size limit) override ``exclude_record`` instead. Loading
    rules from files and adding individual rules are optional capabilities that depend
    on the rule type.

    Example:
        >>> from repotree.exclusion_rules.folder_rules import FolderExclusionRules
        >>> rules = FolderExclusionRules(["node_modules"])
        >>> rules.exclude("node_modules/react/index.js")
        True
        >>> rules.exclude("src/index.js")
        False
    """

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Determine if a given path should be excluded.

        Args:
            path (str): Slash-separated path relative to the repository root.

        Returns:
            bool: True if the path should be excluded, False if it should be kept.
        """
        pass

    def exclude_record(self, record: PathRecord) -> bool:
        """
        Determine if a flat record should be excluded.

        The default implementation only looks at the record's path. Subclasses that
        care about the kind or size of an entry override this method.

        Args:
            record: The record to check.

        Returns:
            bool: True if the record should be excluded.
        """
        return self.exclude(record.path)

    def has_rules(self) -> bool:
        """
        Check whether any rules are configured.

        Returns:
            bool: True unless the subclass reports an empty rule set.
        """
        return True

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """
        Load exclusion rules from one or more files.

        Rule types that don't support file-based loading use this default, which raises.

        Raises:
            NotImplementedError: If this rule type doesn't support loading from files.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support loading rules from files.")

    def add_rule(self, rule: str) -> None:
        """
        Add a single exclusion rule directly.

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")


def filter_records(records: Iterable[PathRecord], rules: Optional[BaseExclusionRules]) -> List[PathRecord]:
    """Drop every record excluded by ``rules``, preserving the order of the rest.

    Args:
        records: Normalized flat records.
        rules: Exclusion rules to apply. ``None`` keeps everything.

    Returns:
        The records that survive exclusion.
    """
    if rules is None:
        return list(records)
    return [record for record in records if not rules.exclude_record(record)]
