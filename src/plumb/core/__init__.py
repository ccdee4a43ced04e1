"""Core infrastructure: Codec, Object Store, Repository, Configuration, Logging."""

from plumb.contracts import MalformedObjectError, ObjectStore
from plumb.core.codec import frame, parse, parse_type, serialize_type
from plumb.core.config import (
    ObjectStoreSettings,
    PlumbSettings,
    RepositoryConfig,
    load_settings,
)
from plumb.core.logging import (
    configure_logging,
    get_logger,
)
from plumb.core.object_store import (
    FilesystemObjectStore,
    compute_object_id,
    hash_object,
    read_object,
    write_object,
)
from plumb.core.repository import METADATA_DIR, Repository, find_repository_root

__all__ = [
    "METADATA_DIR",
    "FilesystemObjectStore",
    "MalformedObjectError",
    "ObjectStore",
    "ObjectStoreSettings",
    "PlumbSettings",
    "Repository",
    "RepositoryConfig",
    "compute_object_id",
    "configure_logging",
    "find_repository_root",
    "frame",
    "get_logger",
    "hash_object",
    "load_settings",
    "parse",
    "parse_type",
    "read_object",
    "serialize_type",
    "write_object",
]
