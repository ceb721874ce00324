"""Exclusion rules for filtering repository records."""

from .base_rules import BaseExclusionRules, filter_records
from .composite_rules import CompositeExclusionRules
from .folder_rules import FolderExclusionRules, is_excluded
from .git_rules import GitIgnoreExclusionRules
from .size_rules import SizeExclusionRules

__all__ = [
    "BaseExclusionRules",
    "CompositeExclusionRules",
    "FolderExclusionRules",
    "GitIgnoreExclusionRules",
    "SizeExclusionRules",
    "filter_records",
    "is_excluded",
]
