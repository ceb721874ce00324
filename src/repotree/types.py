from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class NodeKind(str, Enum):
    """Enumeration of entry kinds reported by a repository listing.

    The values match the ``type`` field used by the flat record format, so a
    kind round-trips through JSON unchanged.

    Attributes:
        FILE: A regular file (a ``blob`` in the GitHub trees API)
        DIRECTORY: A directory (a ``tree`` in the GitHub trees API)
    """

    FILE = "file"
    DIRECTORY = "dir"
