"""
Receipt Types
^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Types re-used by the receipt values and their codec.
"""

from dataclasses import dataclass
from typing import Tuple, Union

from ethereum_types.bytes import Bytes, Bytes20, Bytes256
from ethereum_types.frozen import slotted_freezable

from .crypto.hash import Hash32

Address = Bytes20
Root = Hash32
Bloom = Bytes256

EMPTY_BLOOM = Bloom(b"\x00" * 256)

ReceiptStatus = Union[bool, Root]
"""
Outcome of a transaction: the EIP-658 success flag, or the post-state root
that receipts carried before Byzantium.
"""


@slotted_freezable
@dataclass
class Log:
    """
    Data record produced during the execution of a transaction.
    """

    address: Address
    topics: Tuple[Hash32, ...]
    data: Bytes
