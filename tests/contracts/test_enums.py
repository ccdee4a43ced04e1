"""Tests for contracts enums."""

import pytest


class TestObjectType:
    """Tests for ObjectType - the closed set of object kinds."""

    def test_has_all_required_values(self) -> None:
        """ObjectType has exactly the four object kinds."""
        from plumb.contracts import ObjectType

        assert {e.name for e in ObjectType} == {"COMMIT", "TREE", "TAG", "BLOB"}

    def test_no_unknown_value(self) -> None:
        """ObjectType must NOT have a catch-all member - unknown tags are rejected."""
        from plumb.contracts import ObjectType

        values = [t.value for t in ObjectType]
        assert "unknown" not in values

    def test_string_values_are_header_tags(self) -> None:
        from plumb.contracts import ObjectType

        assert ObjectType.COMMIT.value == "commit"
        assert ObjectType.TREE.value == "tree"
        assert ObjectType.TAG.value == "tag"
        assert ObjectType.BLOB.value == "blob"

    @pytest.mark.parametrize("name", ["commit", "tree", "tag", "blob"])
    def test_tag_is_ascii_bytes(self, name: str) -> None:
        from plumb.contracts import ObjectType

        assert ObjectType(name).tag == name.encode("ascii")

    def test_is_str_enum(self) -> None:
        """StrEnum members compare equal to their tag strings."""
        from plumb.contracts import ObjectType

        assert ObjectType.BLOB == "blob"
        assert ObjectType("tree") is ObjectType.TREE
