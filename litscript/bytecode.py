"""Bytecode object model and its tag-based binary codec.

Every value is written as a one-byte tag followed by a big-endian payload:

=====  =============  =============================================
tag    object         payload
=====  =============  =============================================
1      Numeric8       1 byte unsigned
2      Numeric16      2 bytes signed
3      Numeric32      4 bytes signed
4      StrValue       1 length byte + UTF-8 bytes
5      TupleValue     1 element-count byte + encoded elements
6      VarInvocation  4 bytes unsigned variable id
=====  =============  =============================================
"""

import struct
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import BinaryIO, Tuple

from litscript.errors import (
    EncodingError,
    InvalidStringData,
    TruncatedStream,
    UnrecognizedTag,
    ValueOutOfRange,
    ValueTooLongToEncode,
)
from litscript.material import ImageMaterial

U8_MAX = 0xFF
I16_MIN, I16_MAX = -0x8000, 0x7FFF
I32_MIN, I32_MAX = -0x8000_0000, 0x7FFF_FFFF
U32_MAX = 0xFFFF_FFFF


class Tag(IntEnum):
    NUMERIC8 = 1
    NUMERIC16 = 2
    NUMERIC32 = 3
    STR = 4
    TUPLE = 5
    VAR_INVOCATION = 6


class DataType(Enum):
    NUMERIC8 = "Numeric8"
    NUMERIC16 = "Numeric16"
    NUMERIC32 = "Numeric32"
    STR = "Str"
    TUPLE = "Tuple"
    MATERIAL = "Material"

    def __str__(self) -> str:
        return self.value


NUMERIC_TYPES = frozenset({DataType.NUMERIC8, DataType.NUMERIC16, DataType.NUMERIC32})


class BytecodeObject:
    pass


@dataclass(frozen=True)
class Numeric8(BytecodeObject):
    value: int


@dataclass(frozen=True)
class Numeric16(BytecodeObject):
    value: int


@dataclass(frozen=True)
class Numeric32(BytecodeObject):
    value: int


@dataclass(frozen=True)
class StrValue(BytecodeObject):
    value: str


@dataclass(frozen=True)
class TupleValue(BytecodeObject):
    items: Tuple[BytecodeObject, ...]


@dataclass(frozen=True)
class VarInvocation(BytecodeObject):
    var_id: int


@dataclass(frozen=True, eq=False)
class MaterialValue(BytecodeObject):
    material: ImageMaterial


def numeric(value: int) -> BytecodeObject:
    """Wrap ``value`` in the smallest numeric object that holds it."""
    if 0 <= value <= U8_MAX:
        return Numeric8(value)
    if I16_MIN <= value <= I16_MAX:
        return Numeric16(value)
    if I32_MIN <= value <= I32_MAX:
        return Numeric32(value)
    raise ValueOutOfRange(value)


def direct_data_type(obj: BytecodeObject) -> DataType:
    """Data type of ``obj`` without following variable invocations."""
    if isinstance(obj, Numeric8):
        return DataType.NUMERIC8
    if isinstance(obj, Numeric16):
        return DataType.NUMERIC16
    if isinstance(obj, Numeric32):
        return DataType.NUMERIC32
    if isinstance(obj, StrValue):
        return DataType.STR
    if isinstance(obj, TupleValue):
        return DataType.TUPLE
    if isinstance(obj, MaterialValue):
        return DataType.MATERIAL
    raise AssertionError(f"No direct data type for {obj!r}")


# Encoding


def encode_str(value: str) -> bytes:
    raw = value.encode("utf-8")
    if len(raw) > U8_MAX:
        raise ValueTooLongToEncode("String literal", len(raw))
    return bytes((Tag.STR, len(raw))) + raw


def encode_tuple_payload(count: int, payload: bytes) -> bytes:
    if count > U8_MAX:
        raise ValueTooLongToEncode("Tuple", count)
    return bytes((Tag.TUPLE, count)) + payload


def encode_var_invocation(var_id: int) -> bytes:
    if not 0 <= var_id <= U32_MAX:
        raise ValueOutOfRange(var_id)
    return bytes((Tag.VAR_INVOCATION,)) + struct.pack(">I", var_id)


def encode_object(obj: BytecodeObject) -> bytes:
    if isinstance(obj, Numeric8):
        return struct.pack(">BB", Tag.NUMERIC8, obj.value)
    if isinstance(obj, Numeric16):
        return struct.pack(">Bh", Tag.NUMERIC16, obj.value)
    if isinstance(obj, Numeric32):
        return struct.pack(">Bi", Tag.NUMERIC32, obj.value)
    if isinstance(obj, StrValue):
        return encode_str(obj.value)
    if isinstance(obj, TupleValue):
        payload = b"".join(encode_object(item) for item in obj.items)
        return encode_tuple_payload(len(obj.items), payload)
    if isinstance(obj, VarInvocation):
        return encode_var_invocation(obj.var_id)
    raise EncodingError(f"{type(obj).__name__} cannot be written to bytecode")


# Decoding


def read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise TruncatedStream(size, len(data))
    return data


def read_u8(stream: BinaryIO) -> int:
    return read_exact(stream, 1)[0]


def read_u16(stream: BinaryIO) -> int:
    return struct.unpack(">H", read_exact(stream, 2))[0]


def read_u32(stream: BinaryIO) -> int:
    return struct.unpack(">I", read_exact(stream, 4))[0]


def decode_object(stream: BinaryIO) -> BytecodeObject:
    tag = read_u8(stream)

    if tag == Tag.NUMERIC8:
        return Numeric8(read_u8(stream))
    if tag == Tag.NUMERIC16:
        return Numeric16(struct.unpack(">h", read_exact(stream, 2))[0])
    if tag == Tag.NUMERIC32:
        return Numeric32(struct.unpack(">i", read_exact(stream, 4))[0])
    if tag == Tag.STR:
        length = read_u8(stream)
        raw = read_exact(stream, length)
        try:
            return StrValue(raw.decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise InvalidStringData(f"Error converting from UTF-8: {exc}") from exc
    if tag == Tag.TUPLE:
        count = read_u8(stream)
        return TupleValue(tuple(decode_object(stream) for _ in range(count)))
    if tag == Tag.VAR_INVOCATION:
        return VarInvocation(read_u32(stream))

    raise UnrecognizedTag(tag)
