from ethereum_types.bytes import Bytes, Bytes20, Bytes32
from ethereum_types.numeric import U64, Uint

from op_receipts.fork_types import EMPTY_BLOOM, Log
from op_receipts.receipt import (
    DepositReceipt,
    DepositReceiptWithBloom,
    Receipt,
)

ZERO_BLOOM_HEX = "00" * 256

# EIP-2481 example receipt: no deposit fields.
LEGACY_RECEIPT = bytes.fromhex(
    "f901668001b90100"
    + ZERO_BLOOM_HEX
    + "f85ff85d940000000000000000000000000000000000000011f842a0000000000000"
    "000000000000000000000000000000000000000000000000deada00000000000000000"
    "00000000000000000000000000000000000000000000beef830100ff"
)

# Deposit receipt after Regolith: nonce only.
REGOLITH_RECEIPT = bytes.fromhex(
    "f9010c0182b741b90100" + ZERO_BLOOM_HEX + "c0833d3bbf"
)

# Deposit receipt after Canyon: nonce and receipt version.
CANYON_RECEIPT = bytes.fromhex(
    "f9010d0182b741b90100" + ZERO_BLOOM_HEX + "c0833d3bbf01"
)


def hex_to_address(hex_string: str) -> Bytes20:
    return Bytes20(bytes.fromhex(hex_string.removeprefix("0x")))


def hex_to_hash(hex_string: str) -> Bytes32:
    return Bytes32(bytes.fromhex(hex_string.removeprefix("0x")))


def make_log(address: str, *topics: str, data: Bytes = b"") -> Log:
    return Log(
        address=hex_to_address(address),
        topics=tuple(hex_to_hash(topic) for topic in topics),
        data=data,
    )


LEGACY_LOG = make_log(
    "0x0000000000000000000000000000000000000011",
    "0x000000000000000000000000000000000000000000000000000000000000dead",
    "0x000000000000000000000000000000000000000000000000000000000000beef",
    data=bytes.fromhex("0100ff"),
)

LEGACY_EXPECTED = DepositReceiptWithBloom(
    receipt=DepositReceipt(
        inner=Receipt(
            status=False,
            cumulative_gas_used=Uint(1),
            logs=(LEGACY_LOG,),
        ),
        deposit_nonce=None,
        deposit_receipt_version=None,
    ),
    logs_bloom=EMPTY_BLOOM,
)

REGOLITH_EXPECTED = DepositReceiptWithBloom(
    receipt=DepositReceipt(
        inner=Receipt(status=True, cumulative_gas_used=Uint(46913), logs=()),
        deposit_nonce=U64(4012991),
        deposit_receipt_version=None,
    ),
    logs_bloom=EMPTY_BLOOM,
)

CANYON_EXPECTED = DepositReceiptWithBloom(
    receipt=DepositReceipt(
        inner=Receipt(status=True, cumulative_gas_used=Uint(46913), logs=()),
        deposit_nonce=U64(4012991),
        deposit_receipt_version=U64(1),
    ),
    logs_bloom=EMPTY_BLOOM,
)


def deposit_receipt(
    *logs: Log,
    status: bool = True,
    cumulative_gas_used: int = 21000,
    deposit_nonce: int | None = None,
    deposit_receipt_version: int | None = None,
) -> DepositReceipt:
    return DepositReceipt(
        inner=Receipt(
            status=status,
            cumulative_gas_used=Uint(cumulative_gas_used),
            logs=logs,
        ),
        deposit_nonce=None if deposit_nonce is None else U64(deposit_nonce),
        deposit_receipt_version=(
            None
            if deposit_receipt_version is None
            else U64(deposit_receipt_version)
        ),
    )
