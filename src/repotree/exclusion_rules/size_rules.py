"""Size-based exclusion rules for filtering files by their reported size."""

from typing import Union

from humanfriendly import InvalidSize, parse_size

from repotree.path_record import PathRecord

from .base_rules import BaseExclusionRules


def parse_file_size(size_str: str) -> int:
    """Parse human-readable file size to bytes.

    Args:
        size_str: Size string like '1GB', '500MB', '2.5K', '1MiB' or just '1024'

    Returns:
        Size in bytes

    Raises:
        ValueError: If size_str is not a valid size format

    Example:
        >>> parse_file_size("1KiB")
        1024
        >>> parse_file_size("2.5 MB")
        2500000
    """
    try:
        return int(parse_size(size_str))
    except (InvalidSize, TypeError, ValueError) as e:
        raise ValueError(f"Invalid size format '{size_str}': {e}")


class SizeExclusionRules(BaseExclusionRules):
    """Exclusion rules based on the size reported in the listing.

    Files whose reported size exceeds the limit are excluded. Nothing is read from
    disk: the size comes from the flat record itself. Directories and files whose
    size was not reported are always kept.

    Attributes:
        max_size_bytes (int): Maximum allowed file size in bytes.

    Example:
        >>> from repotree.path_record import normalize_record
        >>> rules = SizeExclusionRules("1MB")
        >>> rules.max_size_bytes
        1000000
        >>> rules.exclude_record(normalize_record("data/big.bin", "file", 5_000_000))
        True
        >>> rules.exclude_record(normalize_record("data/unknown.bin", "file"))
        False
    """

    def __init__(self, max_size: Union[str, int]):
        """Initialize size exclusion rules.

        Args:
            max_size: Maximum file size, either a human-readable string ('1GB',
                '500KB', '2.5K') or an integer number of bytes.

        Raises:
            ValueError: If max_size is negative or its format is invalid
        """
        if isinstance(max_size, bool):
            raise ValueError(f"max_size must be string or int, got {type(max_size)}")
        if isinstance(max_size, str):
            self.max_size_bytes = parse_file_size(max_size)
        elif isinstance(max_size, int):
            if max_size < 0:
                raise ValueError("Size cannot be negative")
            self.max_size_bytes = max_size
        else:
            raise ValueError(f"max_size must be string or int, got {type(max_size)}")

    def exclude(self, path: str) -> bool:
        # A bare path carries no size information.
        return False

    def exclude_record(self, record: PathRecord) -> bool:
        if record.is_dir or record.size is None:
            return False
        return record.size > self.max_size_bytes

    def has_rules(self) -> bool:
        return self.max_size_bytes > 0
