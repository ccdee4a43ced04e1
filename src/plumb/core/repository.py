"""
Repository layout, bootstrapping and discovery.

A repository is a work tree with a metadata root (``.git``) holding:

    objects/          hash-addressed object files
    refs/heads/       refs/tags/       branches/
    HEAD              description      config

Discovery is a pure function of an explicit start directory; there is no
process-wide "current repository".
"""

from pathlib import Path

from plumb.contracts.enums import ObjectType
from plumb.contracts.errors import ObjectTypeMismatchError, PathError, RepositoryNotFoundError
from plumb.contracts.objects import RawObject
from plumb.core.config import PlumbSettings, RepositoryConfig
from plumb.core.logging import get_logger
from plumb.core.object_store import FilesystemObjectStore

__all__ = ["METADATA_DIR", "Repository", "find_repository_root"]

logger = get_logger(__name__)

METADATA_DIR = ".git"

_DEFAULT_DESCRIPTION = "Unnamed repository; edit this file 'description' to name the repository."
_DEFAULT_HEAD = "ref: refs/heads/master"


def find_repository_root(start: Path) -> Path:
    """Walk up from start to the first directory containing a metadata root.

    Args:
        start: Directory to begin the search from

    Returns:
        Absolute path of the work tree

    Raises:
        RepositoryNotFoundError: If no ancestor of start is a repository
    """
    start = start.resolve()
    for candidate in (start, *start.parents):
        if (candidate / METADATA_DIR).is_dir():
            return candidate
    raise RepositoryNotFoundError(start)


class Repository:
    """Handle on a repository's work tree and metadata root.

    Constructing a Repository touches nothing on disk. Use create() to
    bootstrap a new repository, load() to open an existing one, or find()
    to discover one from a nested directory.
    """

    def __init__(
        self,
        work_tree: Path,
        *,
        config: RepositoryConfig | None = None,
        settings: PlumbSettings | None = None,
    ) -> None:
        self.work_tree = work_tree
        self.git_dir = work_tree / METADATA_DIR
        self.config = config if config is not None else RepositoryConfig()
        self.settings = settings if settings is not None else PlumbSettings()
        self.objects = FilesystemObjectStore(
            self.git_dir / "objects",
            compression_level=self.settings.object_store.compression_level,
            fsync=self.settings.object_store.fsync,
        )

    @classmethod
    def create(cls, path: Path, settings: PlumbSettings | None = None) -> "Repository":
        """Create a new repository at path.

        The work tree must either not exist yet or be an empty directory.

        Raises:
            PathError: If path is not a directory, is not empty, or any
                repository file cannot be created
        """
        repo = cls(path, settings=settings)

        if path.exists():
            if not path.is_dir():
                raise PathError("Specified path is not a directory", path)
            if any(path.iterdir()):
                raise PathError("Specified directory is not empty", path)
        else:
            try:
                path.mkdir(parents=True)
            except OSError as e:
                raise PathError(f"Could not create directory ({e.strerror or e})", path) from e

        for parts in (("branches",), ("objects",), ("refs", "tags"), ("refs", "heads")):
            repo.repo_dir(*parts, mkdir=True)

        repo._write_repo_file(("description",), _DEFAULT_DESCRIPTION)
        repo._write_repo_file(("HEAD",), _DEFAULT_HEAD)

        config_path = repo.repo_file("config", mkdir=True)
        try:
            repo.config.save(config_path)
        except OSError as e:
            raise PathError(f"Could not write file ({e.strerror or e})", config_path) from e

        logger.info("repository_created", git_dir=str(repo.git_dir))
        return repo

    @classmethod
    def load(cls, path: Path, settings: PlumbSettings | None = None) -> "Repository":
        """Open an existing repository whose work tree is path.

        Raises:
            RepositoryConfigError: If the config is missing, invalid, or
                declares an unsupported format version
        """
        config = RepositoryConfig.load(path / METADATA_DIR / "config")
        return cls(path, config=config, settings=settings)

    @classmethod
    def find(cls, start: Path, settings: PlumbSettings | None = None) -> "Repository":
        """Discover and load the repository containing start."""
        return cls.load(find_repository_root(start), settings=settings)

    def repo_path(self, *parts: str) -> Path:
        """Compute a path under the metadata root."""
        return self.git_dir.joinpath(*parts)

    def repo_file(self, *parts: str, mkdir: bool = False) -> Path:
        """Compute a file path under the metadata root, optionally creating its parents."""
        path = self.repo_path(*parts)
        if mkdir:
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise PathError(f"Could not create directories ({e.strerror or e})", path.parent) from e
        return path

    def repo_dir(self, *parts: str, mkdir: bool = False) -> Path | None:
        """Compute a directory path under the metadata root.

        Returns None if the directory is absent and mkdir is False.

        Raises:
            PathError: If the path exists but is not a directory, or cannot
                be created
        """
        path = self.repo_path(*parts)
        if path.exists():
            if not path.is_dir():
                raise PathError("Not a directory", path)
            return path
        if not mkdir:
            return None
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PathError(f"Could not create directory ({e.strerror or e})", path) from e
        return path

    def _write_repo_file(self, parts: tuple[str, ...], contents: str) -> None:
        path = self.repo_file(*parts, mkdir=True)
        try:
            path.write_text(contents + "\n", encoding="utf-8")
        except OSError as e:
            raise PathError(f"Could not write file ({e.strerror or e})", path) from e

    def object_find(self, name: str, object_type: ObjectType | None = None) -> str:
        """Resolve a name to an object id.

        Only full hashes are accepted; they are normalized to lowercase.
        When object_type is given the object is read and its type checked.

        Raises:
            ValueError: If name is not a 40-character hex hash
            ObjectTypeMismatchError: If the stored object has another type
        """
        object_id = name.strip().lower()
        # Validates format; raises ValueError on anything but a full hash
        self.objects.path_for_hash(object_id)
        if object_type is not None:
            actual = self.objects.read(object_id).object_type
            if actual != object_type:
                raise ObjectTypeMismatchError(object_id, actual, object_type)
        return object_id

    def write_object(self, object_type: ObjectType, payload: bytes) -> str:
        """Store an object in this repository and return its hash."""
        return self.objects.write(object_type, payload)

    def read_object(self, object_id: str) -> RawObject:
        """Read an object from this repository."""
        return self.objects.read(object_id)
