"""Shared contracts for cross-boundary data types.

This package is a LEAF MODULE with no outbound dependencies to core.
Settings classes are NOT re-exported here - import them from
plumb.core.config.

Import patterns:
    from plumb.contracts import ObjectType, RawObject, MalformedObjectError
    from plumb.core.config import PlumbSettings
"""

from plumb.contracts.enums import ObjectType
from plumb.contracts.errors import (
    CompressionError,
    MalformedObjectError,
    ObjectNotFoundError,
    ObjectTypeMismatchError,
    PathError,
    PlumbError,
    RepositoryConfigError,
    RepositoryNotFoundError,
    UnknownObjectTypeError,
)
from plumb.contracts.object_store import ObjectStore
from plumb.contracts.objects import RawObject

__all__ = [
    "CompressionError",
    "MalformedObjectError",
    "ObjectNotFoundError",
    "ObjectStore",
    "ObjectTypeMismatchError",
    "ObjectType",
    "PathError",
    "PlumbError",
    "RawObject",
    "RepositoryConfigError",
    "RepositoryNotFoundError",
    "UnknownObjectTypeError",
]
