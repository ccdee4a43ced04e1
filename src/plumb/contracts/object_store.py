"""ObjectStore protocol for content-addressable object storage.

This protocol defines the interface used by:
- core/object_store.py (FilesystemObjectStore implementation)
- core/repository.py (Repository delegates object reads and writes)
"""

from typing import Protocol, runtime_checkable

from plumb.contracts.enums import ObjectType
from plumb.contracts.objects import RawObject


@runtime_checkable
class ObjectStore(Protocol):
    """Protocol for object storage backends.

    Objects are addressed by the SHA-1 hex digest of their framed bytes.
    Objects are immutable; there is no update or delete.
    """

    def write(self, object_type: ObjectType, payload: bytes) -> str:
        """Store an object and return its hash.

        Args:
            object_type: Kind of object
            payload: Raw payload bytes

        Returns:
            40-character lowercase SHA-1 hex digest of the framed object
        """
        ...

    def read(self, object_id: str) -> RawObject:
        """Read and validate an object.

        Args:
            object_id: SHA-1 hex digest

        Returns:
            The decoded object

        Raises:
            ObjectNotFoundError: If no object is stored under object_id
            MalformedObjectError: If stored bytes fail header validation
        """
        ...

    def exists(self, object_id: str) -> bool:
        """Check if an object is stored.

        Args:
            object_id: SHA-1 hex digest

        Returns:
            True if the object exists
        """
        ...
