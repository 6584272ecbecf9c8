"""
Deposit Receipts
^^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

A receipt summarises the execution of a transaction. Deposit transactions on
the OP Stack extend the base receipt with two trailing fields that were
introduced by protocol upgrades:

- `deposit_nonce` (Regolith), present for every deposit receipt since then;
- `deposit_receipt_version` (Canyon), which signals the receipt hashing rule
  introduced by that upgrade. It is never set without a nonce.

Computing the logs bloom means hashing every address and topic of every log,
so two representations exist: [`DepositReceipt`], which derives the bloom on
demand, and [`DepositReceiptWithBloom`], which carries it precomputed.

[`DepositReceipt`]: ref:op_receipts.receipt.DepositReceipt
[`DepositReceiptWithBloom`]: ref:op_receipts.receipt.DepositReceiptWithBloom
"""

from dataclasses import dataclass
from typing import Optional, Protocol, Tuple, runtime_checkable

from ethereum_types.frozen import slotted_freezable
from ethereum_types.numeric import U64, Uint

from .bloom import logs_bloom
from .exceptions import InvalidDepositReceipt
from .fork_types import Bloom, Log, ReceiptStatus, Root

FAILED_POST_STATE = Root(b"\x00" * 32)
"""
Post-state root that marks a failed transaction in receipts predating
EIP-658.
"""


@runtime_checkable
class TxReceipt(Protocol):
    """
    Behaviour shared by every receipt variant.
    """

    @property
    def status_or_post_state(self) -> ReceiptStatus:
        """
        The EIP-658 status flag, or the post-state root of older receipts.
        """
        ...

    @property
    def cumulative_gas_used(self) -> Uint:
        """
        Gas used by this and all preceding transactions of the block.
        """
        ...

    @property
    def logs(self) -> Tuple[Log, ...]:
        """
        Logs emitted by the transaction, in emission order.
        """
        ...

    def succeeded(self) -> bool:
        """
        Whether the transaction was successful.
        """
        ...

    def bloom(self) -> Bloom:
        """
        Logs bloom of the receipt, computing it if needed.
        """
        ...

    def bloom_cheap(self) -> Optional[Bloom]:
        """
        Logs bloom of the receipt if it is already known, `None` otherwise.
        """
        ...


@runtime_checkable
class OpTxReceipt(TxReceipt, Protocol):
    """
    Receipt that can expose the deposit specific fields.
    """

    @property
    def deposit_nonce(self) -> Optional[U64]:
        """
        Nonce of the deposit transaction, if any.
        """
        ...

    @property
    def deposit_receipt_version(self) -> Optional[U64]:
        """
        Deposit receipt version, if any.
        """
        ...


def status_succeeded(status: ReceiptStatus) -> bool:
    """
    Interpret a receipt status as a success flag.
    """
    if isinstance(status, bool):
        return status
    return status != FAILED_POST_STATE


@slotted_freezable
@dataclass
class Receipt:
    """
    Result of a transaction.
    """

    status: ReceiptStatus
    cumulative_gas_used: Uint
    logs: Tuple[Log, ...]

    @property
    def status_or_post_state(self) -> ReceiptStatus:
        """
        See [`TxReceipt`].

        [`TxReceipt`]: ref:op_receipts.receipt.TxReceipt
        """
        return self.status

    def succeeded(self) -> bool:
        """
        See [`TxReceipt`].

        [`TxReceipt`]: ref:op_receipts.receipt.TxReceipt
        """
        return status_succeeded(self.status)

    def bloom_slow(self) -> Bloom:
        """
        Calculate the logs bloom by folding over every log.
        """
        return logs_bloom(self.logs)

    def bloom(self) -> Bloom:
        """
        See [`TxReceipt`].

        [`TxReceipt`]: ref:op_receipts.receipt.TxReceipt
        """
        return self.bloom_slow()

    def bloom_cheap(self) -> Optional[Bloom]:
        """
        See [`TxReceipt`].

        [`TxReceipt`]: ref:op_receipts.receipt.TxReceipt
        """
        return None


@slotted_freezable
@dataclass
class DepositReceipt:
    """
    Receipt of a transaction, with the deposit transaction extensions.
    """

    inner: Receipt
    deposit_nonce: Optional[U64]
    deposit_receipt_version: Optional[U64]

    def __post_init__(self) -> None:
        if self.deposit_receipt_version is not None:
            if self.deposit_nonce is None:
                raise InvalidDepositReceipt(
                    "deposit receipt version set without a deposit nonce"
                )

    @property
    def status_or_post_state(self) -> ReceiptStatus:
        return self.inner.status

    @property
    def cumulative_gas_used(self) -> Uint:
        return self.inner.cumulative_gas_used

    @property
    def logs(self) -> Tuple[Log, ...]:
        return self.inner.logs

    def succeeded(self) -> bool:
        return self.inner.succeeded()

    def bloom_slow(self) -> Bloom:
        """
        Calculate the logs bloom of the receipt. This is slow, and
        [`DepositReceiptWithBloom`] can be used to cache the value.

        [`DepositReceiptWithBloom`]: ref:op_receipts.receipt.DepositReceiptWithBloom
        """  # noqa: E501
        return self.inner.bloom_slow()

    def bloom(self) -> Bloom:
        return self.bloom_slow()

    def bloom_cheap(self) -> Optional[Bloom]:
        return None

    def with_bloom(self) -> "DepositReceiptWithBloom":
        """
        Calculate the logs bloom and return the receipt together with it.
        """
        return DepositReceiptWithBloom(
            receipt=self, logs_bloom=self.bloom_slow()
        )


@slotted_freezable
@dataclass
class DepositReceiptWithBloom:
    """
    [`DepositReceipt`] together with its logs bloom.

    The bloom is trusted: it is computed once by
    [`DepositReceipt.with_bloom`], or taken as is from an encoded receipt,
    and never checked against the logs afterwards.

    [`DepositReceipt`]: ref:op_receipts.receipt.DepositReceipt
    [`DepositReceipt.with_bloom`]: ref:op_receipts.receipt.DepositReceipt.with_bloom
    """  # noqa: E501

    receipt: DepositReceipt
    logs_bloom: Bloom

    @classmethod
    def from_receipt(cls, receipt: DepositReceipt) -> "DepositReceiptWithBloom":
        """
        Wrap `receipt`, computing its logs bloom.
        """
        return receipt.with_bloom()

    @property
    def status_or_post_state(self) -> ReceiptStatus:
        return self.receipt.status_or_post_state

    @property
    def cumulative_gas_used(self) -> Uint:
        return self.receipt.cumulative_gas_used

    @property
    def logs(self) -> Tuple[Log, ...]:
        return self.receipt.logs

    @property
    def deposit_nonce(self) -> Optional[U64]:
        return self.receipt.deposit_nonce

    @property
    def deposit_receipt_version(self) -> Optional[U64]:
        return self.receipt.deposit_receipt_version

    def succeeded(self) -> bool:
        return self.receipt.succeeded()

    def bloom(self) -> Bloom:
        return self.logs_bloom

    def bloom_cheap(self) -> Optional[Bloom]:
        return self.logs_bloom

    def into_receipt(self) -> DepositReceipt:
        """
        Drop the bloom, returning only the receipt.
        """
        return self.receipt

    def into_components(self) -> Tuple[DepositReceipt, Bloom]:
        """
        Split into the receipt and its bloom.
        """
        return self.receipt, self.logs_bloom
