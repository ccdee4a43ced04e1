"""Exception taxonomy for the object store and repository layers.

Every failure surfaces to the caller as one of these. The store and codec
never retry and never substitute a default value.
"""

from pathlib import Path

from plumb.contracts.enums import ObjectType


class PlumbError(Exception):
    """Base class for all plumb errors."""

    pass


class PathError(PlumbError):
    """A filesystem path could not be created, opened, read, or written.

    Attributes:
        message: What went wrong
        path: The path the operation was acting on
    """

    def __init__(self, message: str, path: Path) -> None:
        self.message = message
        self.path = path
        super().__init__(f"{message}: {path}")


class ObjectNotFoundError(PathError):
    """No object file exists for the requested hash."""

    def __init__(self, object_id: str, path: Path) -> None:
        self.object_id = object_id
        super().__init__(f"Object not found {object_id}", path)


class MalformedObjectError(PlumbError):
    """Decompressed bytes do not parse as a validly framed object.

    Raised when the header is missing a delimiter, the length field is not
    decimal, the declared length disagrees with the payload, or the type
    tag is unknown. Truncated or padded data is never returned.
    """

    def __init__(self, message: str, object_id: str | None = None) -> None:
        self.object_id = object_id
        if object_id is not None:
            message = f"Malformed object {object_id}: {message}"
        else:
            message = f"Malformed object: {message}"
        super().__init__(message)


class UnknownObjectTypeError(PlumbError, ValueError):
    """Type tag is not one of the recognized object kinds."""

    def __init__(self, tag: bytes) -> None:
        self.tag = tag
        super().__init__(f"Unknown object type {tag!r}")


class ObjectTypeMismatchError(PlumbError):
    """A stored object is not of the type the caller asked for."""

    def __init__(self, object_id: str, actual: ObjectType, expected: ObjectType) -> None:
        self.object_id = object_id
        self.actual = actual
        self.expected = expected
        super().__init__(f"Object {object_id} is a {actual}, not a {expected}")


class CompressionError(PlumbError):
    """zlib failed to compress or decompress object data."""

    pass


class RepositoryNotFoundError(PlumbError):
    """No repository was found walking up from the start directory."""

    def __init__(self, start: Path) -> None:
        self.start = start
        super().__init__(f"Repository could not be found from {start}")


class RepositoryConfigError(PlumbError):
    """Repository config is missing, unreadable, or unsupported."""

    def __init__(self, message: str, path: Path) -> None:
        self.path = path
        super().__init__(f"{message}: {path}")
