"""
Canonical BCS (Binary Canonical Serialization) encoding, the byte format Sui
signs and verifies transactions over.

Only the primitives the transaction encoder needs are here:
-integers are little-endian and fixed width
-sequence lengths and enum variant tags are ULEB128
-strings are length-prefixed UTF-8
-addresses and object ids are 32 raw bytes, no length prefix
"""
from typing import Callable, Iterable, TypeVar

from crypto.encoding import address_bytes

T = TypeVar("T")

def uleb128(value: int) -> bytes:
    if value < 0:
        raise ValueError("uleb128 value must be non-negative")
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)

def _uint(value: int, size: int) -> bytes:
    if value < 0 or value >= 1 << (8 * size):
        raise ValueError(f"value {value} out of range for u{size * 8}")
    return value.to_bytes(size, "little")

def u8(value: int) -> bytes:
    return _uint(value, 1)

def u16(value: int) -> bytes:
    return _uint(value, 2)

def u64(value: int) -> bytes:
    return _uint(value, 8)

def boolean(value: bool) -> bytes:
    return b"\x01" if value else b"\x00"

def byte_vector(data: bytes) -> bytes:
    return uleb128(len(data)) + data

def string(value: str) -> bytes:
    return byte_vector(value.encode("utf-8"))

def address(value: str) -> bytes:
    return address_bytes(value)

def variant(index: int) -> bytes:
    return uleb128(index)

def sequence(items: Iterable[T], encode: Callable[[T], bytes]) -> bytes:
    items = list(items)
    return uleb128(len(items)) + b"".join(encode(item) for item in items)
