"""Conversions from the loosely typed JSON values to bytes and integers."""

from re import sub
from typing import List, SupportsBytes, TypeAlias

BytesConvertible: TypeAlias = str | bytes | SupportsBytes | List[int]
NumberConvertible: TypeAlias = str | bytes | SupportsBytes | int


def to_bytes(input_bytes: BytesConvertible) -> bytes:
    """Convert a hex string, a list of octets or a bytes-like object into bytes."""
    if input_bytes is None:
        raise ValueError("Cannot convert `None` input to bytes")

    if isinstance(input_bytes, (bytes, list, SupportsBytes)):
        return bytes(input_bytes)

    if isinstance(input_bytes, str):
        input_bytes = sub(r"\s+", "", input_bytes)
        if input_bytes.startswith("0x"):
            input_bytes = input_bytes[2:]
        if len(input_bytes) % 2 == 1:
            input_bytes = "0" + input_bytes
        return bytes.fromhex(input_bytes)

    raise ValueError("invalid type for `bytes`")


def to_fixed_size_bytes(input_bytes: BytesConvertible, size: int) -> bytes:
    """Convert the input into exactly `size` bytes, without padding."""
    result = to_bytes(input_bytes)
    if len(result) != size:
        raise ValueError(f"expected {size} bytes but got {len(result)}")
    return result


def to_number(input_number: NumberConvertible) -> int:
    """Convert a decimal or `0x` prefixed string, or big endian bytes, into an int."""
    if isinstance(input_number, bool):
        raise ValueError("invalid type for `number`")
    if isinstance(input_number, int):
        return input_number
    if isinstance(input_number, str):
        return int(input_number, 0)
    if isinstance(input_number, (bytes, SupportsBytes)):
        return int.from_bytes(input_number, byteorder="big")
    raise ValueError("invalid type for `number`")
