# tests/conftest.py
"""Shared test fixtures and helpers.

Fixtures:
- repo: a freshly created Repository under tmp_path
- store: a FilesystemObjectStore over an empty objects directory
- memory_store: an in-memory ObjectStore for protocol-level tests

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from plumb.contracts import ObjectNotFoundError, ObjectType, RawObject
from plumb.core import codec
from plumb.core.object_store import FilesystemObjectStore, compute_object_id
from plumb.core.repository import Repository

# =============================================================================
# Object Store Fixtures
# =============================================================================


class MockObjectStore:
    """In-memory ObjectStore for testing.

    Implements the ObjectStore protocol using a dictionary of framed bytes.
    Each test gets a fresh instance for isolation.
    """

    def __init__(self) -> None:
        self._storage: dict[str, bytes] = {}

    def write(self, object_type: ObjectType, payload: bytes) -> str:
        framed = codec.frame(object_type, payload)
        object_id = compute_object_id(framed)
        self._storage.setdefault(object_id, framed)
        return object_id

    def read(self, object_id: str) -> RawObject:
        if object_id not in self._storage:
            raise ObjectNotFoundError(object_id, Path("<memory>") / object_id)
        return codec.parse(self._storage[object_id], object_id=object_id)

    def exists(self, object_id: str) -> bool:
        return object_id in self._storage


@pytest.fixture
def memory_store() -> MockObjectStore:
    """In-memory object store."""
    return MockObjectStore()


@pytest.fixture
def store(tmp_path: Path) -> FilesystemObjectStore:
    """Filesystem object store rooted at tmp_path/objects."""
    return FilesystemObjectStore(tmp_path / "objects")


@pytest.fixture
def repo(tmp_path: Path) -> Repository:
    """Freshly created repository at tmp_path/repo."""
    return Repository.create(tmp_path / "repo")


# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Filesystem timing varies on CI
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))
