"""
Logs Bloom
^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

The 2048-bit filter that a receipt carries next to its logs. Every log
address and topic sets three bits, so a reader can skip receipts that
certainly do not mention an address or topic without walking the logs.
[`DepositReceiptWithBloom`] keeps the result of [`logs_bloom`] so it is
computed once per receipt.

[`DepositReceiptWithBloom`]: ref:op_receipts.receipt.DepositReceiptWithBloom
[`logs_bloom`]: ref:op_receipts.bloom.logs_bloom
"""

from typing import Iterable

from ethereum_types.bytes import Bytes
from ethereum_types.numeric import Uint

from .crypto.hash import keccak256
from .fork_types import Bloom, Log


def add_to_bloom(bloom: bytearray, bloom_entry: Bytes) -> None:
    """
    Set the three bits of `bloom_entry` in `bloom`, in place.

    Each bit index is the low 11 bits of one of the first three 16-bit
    words of `keccak256(bloom_entry)`, counted from the last byte of the
    filter.
    """
    hash = keccak256(bloom_entry)

    for idx in (0, 2, 4):
        bit_to_set = Uint.from_be_bytes(hash[idx : idx + 2]) & Uint(0x07FF)
        bit_index = 0x07FF - int(bit_to_set)

        byte_index = bit_index // 8
        bit_value = 1 << (7 - (bit_index % 8))
        bloom[byte_index] = bloom[byte_index] | bit_value


def logs_bloom(logs: Iterable[Log]) -> Bloom:
    """
    Fold the address and topics of every log in `logs` into an empty
    filter. Log data does not take part.
    """
    bloom: bytearray = bytearray(b"\x00" * 256)

    for log in logs:
        add_to_bloom(bloom, log.address)
        for topic in log.topics:
            add_to_bloom(bloom, topic)

    return Bloom(bloom)


def bloom_contains(bloom: Bloom, bloom_entry: Bytes) -> bool:
    """
    Check whether every bit `bloom_entry` would set is set in `bloom`.

    A `False` result is definite, a `True` result may be a false positive.
    """
    probe = bytearray(len(bloom))
    add_to_bloom(probe, bloom_entry)
    return all(b & p == p for b, p in zip(bloom, probe))
