"""In-memory object value."""

from dataclasses import dataclass

from plumb.contracts.enums import ObjectType


@dataclass(frozen=True)
class RawObject:
    """A typed payload, exactly as decoded from (or about to be framed into) storage.

    The payload never includes the framing header. Instances are built per
    read/write call and are never persisted in this form.
    """

    object_type: ObjectType
    payload: bytes

    @property
    def size(self) -> int:
        """Payload length in bytes, as declared in the header."""
        return len(self.payload)
