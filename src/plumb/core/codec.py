"""
Object framing codec.

Translates between a typed payload and its canonical framed form:

    <type-tag> <decimal-length>\\0<payload>

Pure functions, no I/O. The declared length is the only structural
integrity check available when reading an object back.
"""

from plumb.contracts.enums import ObjectType
from plumb.contracts.errors import MalformedObjectError, UnknownObjectTypeError
from plumb.contracts.objects import RawObject

__all__ = ["frame", "parse", "parse_type", "serialize_type"]

_SPACE = b" "
_NULL = b"\x00"

# Built once; ObjectType is closed so the mapping never changes.
_TYPES_BY_TAG: dict[bytes, ObjectType] = {object_type.tag: object_type for object_type in ObjectType}


def serialize_type(object_type: ObjectType) -> bytes:
    """Return the ASCII header tag for an object type."""
    return object_type.tag


def parse_type(tag: bytes) -> ObjectType:
    """Map a header tag back to its ObjectType.

    Only the exact lowercase tags are accepted. There is no fallback kind.

    Raises:
        UnknownObjectTypeError: If tag is not a recognized object type
    """
    try:
        return _TYPES_BY_TAG[bytes(tag)]
    except KeyError:
        raise UnknownObjectTypeError(bytes(tag)) from None


def frame(object_type: ObjectType, payload: bytes) -> bytes:
    """Frame a payload with its type/length header."""
    header = serialize_type(object_type) + _SPACE + str(len(payload)).encode("ascii") + _NULL
    return header + payload


def parse(data: bytes, object_id: str | None = None) -> RawObject:
    """Parse framed bytes into a RawObject, validating the header.

    The first space ends the type tag and the first null ends the header.
    Later spaces and nulls belong to the payload.

    Args:
        data: Framed (decompressed) object bytes
        object_id: Hash of the object, used in error messages

    Returns:
        The decoded object

    Raises:
        MalformedObjectError: If a delimiter is missing, the length field is
            not decimal, the declared length disagrees with the payload, or
            the type tag is unknown
    """
    space = data.find(_SPACE)
    if space == -1:
        raise MalformedObjectError("missing space after type tag", object_id)

    null = data.find(_NULL)
    if null == -1:
        raise MalformedObjectError("missing null byte after header", object_id)
    if null < space:
        raise MalformedObjectError("null byte inside type tag", object_id)

    size_field = data[space + 1 : null]
    # isdigit() on bytes only accepts ASCII digits
    if not size_field.isdigit():
        raise MalformedObjectError(f"invalid length field {size_field!r}", object_id)

    payload = data[null + 1 :]
    declared = int(size_field)
    if declared != len(payload):
        raise MalformedObjectError(f"bad length, declared {declared} but found {len(payload)}", object_id)

    try:
        object_type = parse_type(data[:space])
    except UnknownObjectTypeError as e:
        raise MalformedObjectError(str(e), object_id) from e

    return RawObject(object_type=object_type, payload=bytes(payload))
