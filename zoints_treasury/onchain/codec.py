"""
Fixed-width little-endian field formats shared by account records and instruction payloads.

A layout is an ordered tuple of ``(field name, format)`` pairs. Fields are laid out
back to back in declaration order, with no length prefixes and no padding, exactly as
the on-chain program packs them.
"""
from enum import IntEnum
from typing import Any, Dict, Mapping, Tuple, Type

from borsh_construct import I64, U8, U16, U64
from construct import Adapter, Bytes, Construct, ConstructError, MappingError
from solders.pubkey import Pubkey

from ..errors import DecodeError, InvalidArgument

PUBKEY_LEN = 32

U16_MAX = 2**16 - 1
U64_MAX = 2**64 - 1
I64_MIN = -(2**63)
I64_MAX = 2**63 - 1


class PubkeyAdapter(Adapter):
    """
    32 raw bytes <-> solders Pubkey
    """

    def _decode(self, obj, context, path):
        return Pubkey(bytes(obj))

    def _encode(self, obj, context, path):
        if not isinstance(obj, Pubkey):
            raise MappingError(f"expected a Pubkey, got {obj!r}", path=path)
        return bytes(obj)


class IntEnumAdapter(Adapter):
    """
    Unsigned integer <-> IntEnum. Only the enumerated ordinals are legal on the wire.
    """

    def __init__(self, subcon: Construct, enum: Type[IntEnum]):
        super().__init__(subcon)
        self.enum = enum

    def _parse_variant(self, obj, path):
        try:
            return self.enum(obj)
        except ValueError:
            raise MappingError(
                f"undefined {self.enum.__name__} value {obj!r}", path=path
            )

    def _decode(self, obj, context, path):
        return self._parse_variant(obj, path)

    def _encode(self, obj, context, path):
        return int(self._parse_variant(obj, path))


PUBKEY = PubkeyAdapter(Bytes(PUBKEY_LEN))

Layout = Tuple[Tuple[str, Construct], ...]


def layout_size(layout: Layout) -> int:
    return sum(fmt.sizeof() for _, fmt in layout)


def encode_fields(name: str, layout: Layout, values: Mapping[str, Any]) -> bytes:
    """
    Serialize ``values`` field by field in layout order.
    """
    out = bytearray()
    for field, fmt in layout:
        try:
            out += fmt.build(values[field])
        except ConstructError as e:
            raise InvalidArgument(f"{name}.{field}", str(e)) from e
    return bytes(out)


def decode_fields(name: str, layout: Layout, data: bytes) -> Dict[str, Any]:
    """
    Parse the leading ``layout_size(layout)`` bytes of ``data``.
    Either every field decodes or DecodeError is raised.
    """
    size = layout_size(layout)
    if len(data) < size:
        raise DecodeError(
            name, reason=f"expected at least {size} bytes, got {len(data)}"
        )
    values = {}
    offset = 0
    for field, fmt in layout:
        width = fmt.sizeof()
        try:
            values[field] = fmt.parse(data[offset : offset + width])
        except ConstructError as e:
            raise DecodeError(name, field, str(e)) from e
        offset += width
    return values


def check_pubkey(field: str, value) -> None:
    if not isinstance(value, Pubkey):
        raise InvalidArgument(field, f"expected a Pubkey, got {type(value).__name__}")


def check_int(field: str, value, lower: int, upper: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(field, f"expected an integer, got {value!r}")
    if not lower <= value <= upper:
        raise InvalidArgument(field, f"{value} is outside [{lower}, {upper}]")


def check_u16(field: str, value) -> None:
    check_int(field, value, 0, U16_MAX)


def check_u64(field: str, value) -> None:
    check_int(field, value, 0, U64_MAX)


def check_i64(field: str, value) -> None:
    check_int(field, value, I64_MIN, I64_MAX)
