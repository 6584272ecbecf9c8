"""
RLP Cursor Utilities
^^^^^^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

`ethereum_rlp` decodes a complete, self contained item. Receipts of deposit
transactions need more control than that: the decoder has to walk the fields
of a list one by one and compare what it consumed with what the list header
declared. This module provides a read cursor over a byte buffer, RLP header
decoding, field decoders that advance the cursor, and the arithmetic needed
to predict encoded lengths without encoding.
"""

from dataclasses import dataclass
from typing import SupportsInt, Tuple, Type, TypeVar

from ethereum_rlp import rlp
from ethereum_rlp.exceptions import DecodingError
from ethereum_types.bytes import Bytes, FixedBytes
from ethereum_types.numeric import U64, Uint

from .exceptions import ListLengthMismatch, UnexpectedString

U = TypeVar("U", Uint, U64)
B = TypeVar("B", bound=FixedBytes)
T = TypeVar("T")


@dataclass
class Cursor:
    """
    Read position over an immutable byte buffer.
    """

    buffer: Bytes
    position: int = 0

    def remaining(self) -> int:
        """
        Number of bytes not yet read.
        """
        return len(self.buffer) - self.position

    def peek(self) -> int:
        """
        Return the next byte without consuming it.
        """
        if self.position >= len(self.buffer):
            raise DecodingError("input too short")
        return self.buffer[self.position]

    def read(self, count: int) -> Bytes:
        """
        Consume and return the next `count` bytes.
        """
        end = self.position + count
        if count < 0 or end > len(self.buffer):
            raise DecodingError(
                f"input too short: need {count} byte(s), "
                f"have {self.remaining()}"
            )
        data = self.buffer[self.position : end]
        self.position = end
        return data


@dataclass
class RlpHeader:
    """
    Decoded RLP header: whether the item is a list, and the length of its
    payload (excluding the header itself).
    """

    is_list: bool
    payload_length: int


#
# Lengths
#


def length_of_length(payload_length: int) -> int:
    """
    Number of bytes taken by the header of an item whose payload is
    `payload_length` bytes long.
    """
    if payload_length < 0x38:
        return 1
    return 1 + len(Uint(payload_length).to_be_bytes())


def encoded_bytes_length(data: Bytes) -> int:
    """
    Length of the RLP encoding of the byte string `data`.
    """
    if len(data) == 1 and data[0] < 0x80:
        return 1
    return length_of_length(len(data)) + len(data)


def encoded_uint_length(value: SupportsInt) -> int:
    """
    Length of the RLP encoding of the unsigned integer `value`.
    """
    return encoded_bytes_length(Uint(value).to_be_bytes())


def encoded_list_length(payload_length: int) -> int:
    """
    Length of the RLP encoding of a list whose items take `payload_length`
    bytes once encoded.
    """
    return length_of_length(payload_length) + payload_length


def encode_header(is_list: bool, payload_length: int) -> Bytes:
    """
    Encode the header of a string or list with the given payload length.

    Same header rules as `ethereum_rlp.rlp.encode_bytes` and
    `encode_sequence`, for a payload whose length is already known.
    """
    offset = 0xC0 if is_list else 0x80
    if payload_length < 0x38:
        return bytes([offset + payload_length])

    payload_length_as_be = Uint(payload_length).to_be_bytes()
    return bytes([offset + 0x37 + len(payload_length_as_be)]) + (
        payload_length_as_be
    )


#
# Decoding
#


def _decode_long_length(cursor: Cursor, length_length: int) -> int:
    length_bytes = cursor.read(length_length)
    if length_bytes[0] == 0:
        raise DecodingError("leading zero in length of length")
    length = int(Uint.from_be_bytes(length_bytes))
    if length < 0x38:
        raise DecodingError("non-canonical size: long form for short payload")
    return length


def decode_header(cursor: Cursor) -> RlpHeader:
    """
    Decode the RLP header at the cursor.

    A single byte below `0x80` is its own payload, so the cursor is left in
    place and a one byte string header is returned. In every other case the
    cursor is moved to the first byte of the payload. The payload itself is
    not checked against the buffer size: callers either read it (and fail if
    it is missing) or account for it themselves.
    """
    first = cursor.peek()

    if first < 0x80:
        return RlpHeader(is_list=False, payload_length=1)

    cursor.read(1)
    if first <= 0xB7:
        payload_length = first - 0x80
        if (
            payload_length == 1
            and cursor.remaining() > 0
            and cursor.peek() < 0x80
        ):
            raise DecodingError("non-canonical single byte string")
        return RlpHeader(is_list=False, payload_length=payload_length)
    elif first <= 0xBF:
        payload_length = _decode_long_length(cursor, first - 0xB7)
        return RlpHeader(is_list=False, payload_length=payload_length)
    elif first <= 0xF7:
        return RlpHeader(is_list=True, payload_length=first - 0xC0)
    else:
        payload_length = _decode_long_length(cursor, first - 0xF7)
        return RlpHeader(is_list=True, payload_length=payload_length)


def decode_bytes(cursor: Cursor) -> Bytes:
    """
    Decode a byte string at the cursor.
    """
    header = decode_header(cursor)
    if header.is_list:
        raise DecodingError("unexpected list, expected bytes")
    return cursor.read(header.payload_length)


def decode_uint(cursor: Cursor, cls: Type[U]) -> U:
    """
    Decode an unsigned integer of type `cls` at the cursor. Leading zeros
    are rejected, as are values that do not fit into `cls`.
    """
    data = decode_bytes(cursor)
    if data and data[0] == 0:
        raise DecodingError(f"leading zero in `{cls.__name__}`")
    try:
        return cls.from_be_bytes(data)
    except ValueError as e:
        raise DecodingError(f"overflow decoding `{cls.__name__}`") from e


def decode_fixed_bytes(cursor: Cursor, cls: Type[B]) -> B:
    """
    Decode a fixed size byte string of type `cls` at the cursor.
    """
    data = decode_bytes(cursor)
    try:
        return cls(data)
    except ValueError as e:
        raise DecodingError(f"cannot decode into `{cls.__name__}`") from e


def decode_item(cursor: Cursor, cls: Type[T]) -> T:
    """
    Slice the complete item at the cursor and decode it into `cls` with
    [`decode_to`].

    [`decode_to`]: ref:ethereum_rlp.rlp.decode_to
    """
    start = cursor.position
    header = decode_header(cursor)
    cursor.read(header.payload_length)
    return rlp.decode_to(cls, cursor.buffer[start : cursor.position])


def decode_sequence(cursor: Cursor, cls: Type[T]) -> Tuple[T, ...]:
    """
    Decode a list whose items all have type `cls`.
    """
    header = decode_header(cursor)
    if not header.is_list:
        raise UnexpectedString(f"expected a list of `{cls.__name__}`")
    if header.payload_length > cursor.remaining():
        raise DecodingError("input too short for list payload")

    end = cursor.position + header.payload_length
    items = []
    while cursor.position < end:
        items.append(decode_item(cursor, cls))

    if cursor.position != end:
        raise ListLengthMismatch(
            expected=header.payload_length,
            got=cursor.position - (end - header.payload_length),
        )
    return tuple(items)
