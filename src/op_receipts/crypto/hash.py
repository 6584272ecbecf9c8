"""
Cryptographic Hash Functions
^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Keccak-256, the hash behind log topics and the logs bloom.
"""

from Crypto.Hash import keccak
from ethereum_types.bytes import Bytes, Bytes32

Hash32 = Bytes32


def keccak256(buffer: Bytes) -> Hash32:
    """
    Keccak-256 digest of `buffer` (the pre-standard padding, not SHA3-256).
    """
    k = keccak.new(digest_bits=256)
    return Hash32(k.update(buffer).digest())
