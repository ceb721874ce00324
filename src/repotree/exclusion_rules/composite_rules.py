"""Composite exclusion rules for combining multiple rule types."""

from typing import List, Sequence

from repotree.path_record import PathRecord

from .base_rules import BaseExclusionRules


class CompositeExclusionRules(BaseExclusionRules):
    """Composite exclusion rules that combine multiple rule types.

    A record is excluded if ANY of the constituent rules excludes it. This lets the
    caller's folder exclusion set, gitignore-style patterns and size limits be applied
    in a single filtering pass.

    Attributes:
        rules (List[BaseExclusionRules]): List of constituent exclusion rules.

    Example:
        >>> from repotree.exclusion_rules.folder_rules import FolderExclusionRules
        >>> from repotree.exclusion_rules.git_rules import GitIgnoreExclusionRules
        >>> patterns = GitIgnoreExclusionRules()
        >>> patterns.add_rule("*.log")
        >>> composite = CompositeExclusionRules([FolderExclusionRules([".git"]), patterns])
        >>> composite.exclude(".git/config")
        True
        >>> composite.exclude("logs/server.log")
        True
        >>> composite.exclude("src/app.py")
        False
    """

    def __init__(self, rules: Sequence[BaseExclusionRules]):
        """Initialize composite exclusion rules.

        Args:
            rules: Sequence of exclusion rules to combine, evaluated in order.

        Raises:
            ValueError: If rules is empty.
            TypeError: If any rule doesn't implement BaseExclusionRules.
        """
        if not rules:
            raise ValueError("At least one exclusion rule must be provided")

        for i, rule in enumerate(rules):
            if not isinstance(rule, BaseExclusionRules):
                raise TypeError(f"Rule at index {i} must implement BaseExclusionRules, got {type(rule)}")

        self.rules: List[BaseExclusionRules] = list(rules)

    def exclude(self, path: str) -> bool:
        return any(rule.exclude(path) for rule in self.rules)

    def exclude_record(self, record: PathRecord) -> bool:
        return any(rule.exclude_record(record) for rule in self.rules)

    def has_rules(self) -> bool:
        return any(rule.has_rules() for rule in self.rules)

    def add_rule_object(self, rule: BaseExclusionRules) -> None:
        """Add another exclusion rule object to this composite.

        Raises:
            TypeError: If rule doesn't implement BaseExclusionRules.
        """
        if not isinstance(rule, BaseExclusionRules):
            raise TypeError(f"Rule must implement BaseExclusionRules, got {type(rule)}")
        self.rules.append(rule)

    def remove_rule_object(self, rule: BaseExclusionRules) -> bool:
        """Remove an exclusion rule object from this composite.

        Returns:
            True if the rule was found and removed, False if it wasn't in the composite.
        """
        try:
            self.rules.remove(rule)
            return True
        except ValueError:
            return False

    def get_rules(self) -> List[BaseExclusionRules]:
        """Get a copy of the constituent rules list."""
        return list(self.rules)
