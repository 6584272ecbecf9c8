"""
Deposit Receipt Encoding
^^^^^^^^^^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

RLP encoding of [`DepositReceiptWithBloom`]. A receipt is encoded as the list

    [status, cumulative_gas_used, logs_bloom, logs, deposit_nonce?,
     deposit_receipt_version?]

where the last two fields are only present when set. There is no field
count on the wire: the decoder reads the four mandatory fields and then reads
one more integer for as long as the payload length declared by the list
header is not exhausted.

[`DepositReceiptWithBloom`]: ref:op_receipts.receipt.DepositReceiptWithBloom
"""

import enum
import logging
from typing import Iterator, Optional, Tuple

from ethereum_rlp import rlp
from ethereum_rlp.exceptions import DecodingError
from ethereum_types.bytes import Bytes
from ethereum_types.numeric import U64, Uint

from .exceptions import ListLengthMismatch, TrailingBytes, UnexpectedString
from .fork_types import EMPTY_BLOOM, Bloom, Log, ReceiptStatus, Root
from .receipt import DepositReceipt, DepositReceiptWithBloom, Receipt
from .rlp_utils import (
    Cursor,
    decode_bytes,
    decode_fixed_bytes,
    decode_header,
    decode_sequence,
    decode_uint,
    encode_header,
    encoded_bytes_length,
    encoded_list_length,
    encoded_uint_length,
    length_of_length,
)

logger = logging.getLogger(__name__)

MAX_GAS_USED_BYTES = 16
"""
Widest accepted encoding of `cumulative_gas_used`, a 128-bit quantity.
"""


class DecodeState(enum.Enum):
    """
    Steps of the receipt decoder.
    """

    MANDATORY = enum.auto()
    MAYBE_NONCE = enum.auto()
    MAYBE_VERSION = enum.auto()
    DONE = enum.auto()


#
# Lengths
#


def _status_length(status: ReceiptStatus) -> int:
    if isinstance(status, bool):
        return 1
    return encoded_bytes_length(status)


def log_length(log: Log) -> int:
    """
    Length of the RLP encoding of `log`.
    """
    topics_length = sum(encoded_bytes_length(topic) for topic in log.topics)
    return encoded_list_length(
        encoded_bytes_length(log.address)
        + encoded_list_length(topics_length)
        + encoded_bytes_length(log.data)
    )


def payload_length(receipt: DepositReceiptWithBloom) -> int:
    """
    Length of the payload of the receipt list, i.e. the sum of the encoded
    lengths of every present field.
    """
    inner = receipt.receipt.inner
    length = (
        _status_length(inner.status)
        + encoded_uint_length(inner.cumulative_gas_used)
        + encoded_bytes_length(receipt.logs_bloom)
        + encoded_list_length(sum(log_length(log) for log in inner.logs))
    )
    if receipt.deposit_nonce is not None:
        length += encoded_uint_length(receipt.deposit_nonce)
    if receipt.deposit_receipt_version is not None:
        length += encoded_uint_length(receipt.deposit_receipt_version)
    return length


def encoded_length(receipt: DepositReceiptWithBloom) -> int:
    """
    Exact number of bytes [`encode`] produces for `receipt`.

    [`encode`]: ref:op_receipts.codec.encode
    """
    length = payload_length(receipt)
    return length + length_of_length(length)


#
# Encode
#


def encode_to(receipt: DepositReceiptWithBloom, out: bytearray) -> None:
    """
    Append the RLP encoding of `receipt` to `out`.
    """
    inner = receipt.receipt.inner

    out += encode_header(True, payload_length(receipt))
    out += rlp.encode(inner.status)
    out += rlp.encode(inner.cumulative_gas_used)
    out += rlp.encode(receipt.logs_bloom)
    out += rlp.encode(inner.logs)
    if receipt.deposit_nonce is not None:
        out += rlp.encode(receipt.deposit_nonce)
    if receipt.deposit_receipt_version is not None:
        out += rlp.encode(receipt.deposit_receipt_version)


def encode(receipt: DepositReceiptWithBloom) -> Bytes:
    """
    Encode `receipt` using RLP.
    """
    out = bytearray()
    encode_to(receipt, out)
    return Bytes(out)


#
# Decode
#


def decode_status(cursor: Cursor) -> ReceiptStatus:
    """
    Decode a receipt status: an empty string or `0x01` for the EIP-658 flag,
    32 bytes for a post-state root.
    """
    data = decode_bytes(cursor)
    if data == b"":
        return False
    elif data == b"\x01":
        return True
    elif len(data) == 32:
        return Root(data)
    else:
        raise DecodingError("invalid receipt status")


def decode_gas_used(cursor: Cursor) -> Uint:
    """
    Decode `cumulative_gas_used`, rejecting values wider than
    [`MAX_GAS_USED_BYTES`].

    [`MAX_GAS_USED_BYTES`]: ref:op_receipts.codec.MAX_GAS_USED_BYTES
    """
    value = decode_uint(cursor, Uint)
    if len(value.to_be_bytes()) > MAX_GAS_USED_BYTES:
        raise DecodingError("cumulative gas used does not fit in 128 bits")
    return value


def decode_from(cursor: Cursor) -> DepositReceiptWithBloom:
    """
    Decode one receipt starting at `cursor`.

    The cursor is advanced past the receipt only if decoding succeeds, and
    never past the payload length declared by the receipt's list header, so
    receipts can be read one after the other from a single buffer.
    """
    work = Cursor(cursor.buffer, cursor.position)

    header = decode_header(work)
    if not header.is_list:
        raise UnexpectedString("expected a receipt list, found a string")
    started_len = work.remaining()
    if started_len < header.payload_length:
        logger.debug(
            "receipt payload truncated: declared %d, available %d",
            header.payload_length,
            started_len,
        )
        raise ListLengthMismatch(
            expected=header.payload_length, got=started_len
        )

    def bytes_remaining() -> int:
        return header.payload_length - (started_len - work.remaining())

    status: ReceiptStatus = False
    cumulative_gas_used = Uint(0)
    logs_bloom: Bloom = EMPTY_BLOOM
    logs: Tuple[Log, ...] = ()
    deposit_nonce: Optional[U64] = None
    deposit_receipt_version: Optional[U64] = None

    state = DecodeState.MANDATORY
    while state is not DecodeState.DONE:
        logger.debug("%s: %d byte(s) remaining", state.name, bytes_remaining())

        if state is DecodeState.MANDATORY:
            status = decode_status(work)
            cumulative_gas_used = decode_gas_used(work)
            logs_bloom = decode_fixed_bytes(work, Bloom)
            logs = decode_sequence(work, Log)
            state = DecodeState.MAYBE_NONCE
        elif state is DecodeState.MAYBE_NONCE:
            if bytes_remaining() > 0:
                deposit_nonce = decode_uint(work, U64)
                state = DecodeState.MAYBE_VERSION
            else:
                state = DecodeState.DONE
        elif state is DecodeState.MAYBE_VERSION:
            if bytes_remaining() > 0:
                deposit_receipt_version = decode_uint(work, U64)
            state = DecodeState.DONE

    consumed = started_len - work.remaining()
    if consumed != header.payload_length:
        logger.debug(
            "receipt length mismatch: declared %d, consumed %d",
            header.payload_length,
            consumed,
        )
        raise ListLengthMismatch(expected=header.payload_length, got=consumed)

    receipt = DepositReceipt(
        inner=Receipt(
            status=status,
            cumulative_gas_used=cumulative_gas_used,
            logs=logs,
        ),
        deposit_nonce=deposit_nonce,
        deposit_receipt_version=deposit_receipt_version,
    )

    cursor.position = work.position
    return DepositReceiptWithBloom(receipt=receipt, logs_bloom=logs_bloom)


def decode(encoded: Bytes) -> DepositReceiptWithBloom:
    """
    Decode exactly one receipt from `encoded`.
    """
    cursor = Cursor(Bytes(encoded))
    receipt = decode_from(cursor)
    if cursor.remaining() != 0:
        raise TrailingBytes(
            f"{cursor.remaining()} byte(s) left after decoding receipt"
        )
    return receipt


def decode_stream(encoded: Bytes) -> Iterator[DepositReceiptWithBloom]:
    """
    Decode a concatenation of encoded receipts, one at a time.
    """
    cursor = Cursor(Bytes(encoded))
    while cursor.remaining() > 0:
        yield decode_from(cursor)
