"""
Filesystem object store.

Objects are framed, hashed with SHA-1 over the framed bytes, compressed
with zlib and written to ``objects/<hash[:2]>/<hash[2:]>``. The hash is
both the object's identity and its storage address.

Writes are atomic: data is staged in a temporary file beside the target
and moved into place with os.replace, so readers never observe a partially
written object. Every write rewrites the object file, so writing the same
content again repairs a damaged copy.
"""

import hashlib
import os
import re
import zlib
from pathlib import Path
from uuid import uuid4

from plumb.contracts.enums import ObjectType
from plumb.contracts.errors import CompressionError, ObjectNotFoundError, PathError
from plumb.contracts.objects import RawObject
from plumb.core import codec
from plumb.core.logging import get_logger

__all__ = [
    "DEFAULT_COMPRESSION_LEVEL",
    "FilesystemObjectStore",
    "compute_object_id",
    "hash_object",
    "read_object",
    "write_object",
]

logger = get_logger(__name__)

DEFAULT_COMPRESSION_LEVEL = 1

# SHA-1 hex digest: exactly 40 lowercase hex characters
_SHA1_HEX_PATTERN = re.compile(r"^[a-f0-9]{40}$")


def compute_object_id(framed: bytes) -> str:
    """Content hash of framed object bytes."""
    return hashlib.sha1(framed).hexdigest()


def hash_object(object_type: ObjectType, payload: bytes) -> str:
    """Compute the hash an object would be stored under, without writing it."""
    return compute_object_id(codec.frame(object_type, payload))


class FilesystemObjectStore:
    """Filesystem-based object store.

    Stores objects in a directory structure using the first 2 characters
    of the hash as subdirectory and the remaining 38 as file name.

    Structure: objects_dir/ab/cdef123...
    """

    def __init__(
        self,
        objects_dir: Path,
        *,
        compression_level: int = DEFAULT_COMPRESSION_LEVEL,
        fsync: bool = True,
    ) -> None:
        """Initialize filesystem store.

        The objects directory is not created here; write() creates fan-out
        directories on demand.

        Args:
            objects_dir: Root directory for object storage
            compression_level: zlib compression level (0-9)
            fsync: Flush staged files to disk before renaming into place
        """
        if not 0 <= compression_level <= 9:
            raise ValueError(f"compression_level must be between 0 and 9, got {compression_level}")
        self.objects_dir = objects_dir
        self.compression_level = compression_level
        self.fsync = fsync

    def path_for_hash(self, object_id: str) -> Path:
        """Get filesystem path for an object hash.

        Args:
            object_id: Must be a valid SHA-1 hex digest (40 lowercase hex chars)

        Returns:
            Path under objects_dir for the object

        Raises:
            ValueError: If object_id is not a valid SHA-1 hex digest
                        or if resolved path escapes objects_dir
        """
        if not _SHA1_HEX_PATTERN.match(object_id):
            raise ValueError(f"Invalid object id: must be 40 lowercase hex characters, got {repr(object_id)[:50]}")

        path = self.objects_dir / object_id[:2] / object_id[2:]

        # The regex already rules out separators; this catches symlinked fan-out dirs
        resolved = path.resolve()
        base_resolved = self.objects_dir.resolve()
        if not resolved.is_relative_to(base_resolved):
            raise ValueError(f"Invalid object id: resolved path {resolved} is not under {base_resolved}")

        return path

    def write(self, object_type: ObjectType, payload: bytes) -> str:
        """Store an object and return its hash.

        The object file is always rewritten through a staged temp file, so
        writing the same content again replaces a damaged copy with a good
        one. Identical hashes mean identical framed bytes, so the rewrite
        never changes what an intact object reads back as.

        Raises:
            PathError: If the fan-out directory or object file cannot be written
            CompressionError: If zlib fails to compress the framed bytes
        """
        framed = codec.frame(object_type, payload)
        object_id = compute_object_id(framed)
        path = self.path_for_hash(object_id)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PathError(f"Could not create object directory ({e.strerror or e})", path.parent) from e

        try:
            compressed = zlib.compress(framed, self.compression_level)
        except zlib.error as e:
            raise CompressionError(f"Unable to compress object data {object_id}: {e}") from e

        self._write_atomic(path, compressed)
        logger.debug(
            "object_written",
            object_id=object_id,
            object_type=str(object_type),
            size=len(payload),
            compressed_size=len(compressed),
        )
        return object_id

    def _write_atomic(self, path: Path, data: bytes) -> None:
        """Stage data beside path, then rename it into place."""
        tmp_path = path.parent / f".{path.name}.tmp-{uuid4().hex}"
        try:
            with open(tmp_path, "wb") as handle:
                handle.write(data)
                if self.fsync:
                    handle.flush()
                    os.fsync(handle.fileno())
            os.replace(tmp_path, path)
        except OSError as e:
            raise PathError(f"Could not write object file ({e.strerror or e})", path) from e
        finally:
            tmp_path.unlink(missing_ok=True)

    def read(self, object_id: str) -> RawObject:
        """Read an object by hash, validating its header.

        Raises:
            ObjectNotFoundError: If no object is stored under object_id
            PathError: If the object file exists but cannot be read
            CompressionError: If the file is not a valid zlib stream
            MalformedObjectError: If the framed bytes fail validation
        """
        path = self.path_for_hash(object_id)

        try:
            compressed = path.read_bytes()
        except FileNotFoundError:
            raise ObjectNotFoundError(object_id, path) from None
        except OSError as e:
            raise PathError(f"Could not read object file ({e.strerror or e})", path) from e

        try:
            framed = zlib.decompress(compressed)
        except zlib.error as e:
            raise CompressionError(f"Could not read object data {object_id}: {e}") from e

        obj = codec.parse(framed, object_id=object_id)
        logger.debug("object_read", object_id=object_id, object_type=str(obj.object_type), size=obj.size)
        return obj

    def exists(self, object_id: str) -> bool:
        """Check if an object is stored."""
        return self.path_for_hash(object_id).is_file()


def write_object(
    metadata_root: Path,
    object_type: ObjectType,
    payload: bytes,
    *,
    compression_level: int = DEFAULT_COMPRESSION_LEVEL,
    fsync: bool = True,
) -> str:
    """Write an object under ``metadata_root/objects`` and return its hash."""
    store = FilesystemObjectStore(metadata_root / "objects", compression_level=compression_level, fsync=fsync)
    return store.write(object_type, payload)


def read_object(metadata_root: Path, object_id: str) -> RawObject:
    """Read an object from ``metadata_root/objects``."""
    return FilesystemObjectStore(metadata_root / "objects").read(object_id)
