"""Object kinds recognized by the store.

There is no "unknown" kind. A tag that is not one of these is rejected,
never mapped onto a default.
"""

from enum import StrEnum


class ObjectType(StrEnum):
    """Kind of a stored object.

    The value is the lowercase ASCII tag written into the object header.
    """

    COMMIT = "commit"
    TREE = "tree"
    TAG = "tag"
    BLOB = "blob"

    @property
    def tag(self) -> bytes:
        """Header tag bytes for this kind."""
        return self.value.encode("ascii")
