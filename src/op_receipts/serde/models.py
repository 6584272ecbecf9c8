"""
JSON form of deposit receipts.

The fields of the base receipt are inlined at the top level. The status is
rendered either as `status` (EIP-658 flag) or as `root` (post-state root),
never both. `depositNonce` and `depositReceiptVersion` are quantities and are
left out entirely when absent.
"""

from typing import Any, Dict, List, Mapping, Union

from ethereum_types.bytes import Bytes20, Bytes32, Bytes256
from ethereum_types.numeric import U64, Uint
from pydantic import field_validator, model_validator

from ..fork_types import Log, ReceiptStatus
from ..receipt import DepositReceipt, DepositReceiptWithBloom, Receipt
from .base_types import Address, Bloom, Bytes, Hash, HexNumber
from .pydantic import CamelModel


class LogModel(CamelModel):
    """Log entry."""

    address: Address
    topics: List[Hash]
    data: Bytes

    @classmethod
    def from_log(cls, log: Log) -> "LogModel":
        """Build the model of `log`."""
        return cls(
            address=Address(log.address),
            topics=[Hash(topic) for topic in log.topics],
            data=Bytes(log.data),
        )

    def to_log(self) -> Log:
        """Convert back into a `Log`."""
        return Log(
            address=Bytes20(self.address),
            topics=tuple(Bytes32(topic) for topic in self.topics),
            data=bytes(self.data),
        )


class DepositReceiptModel(CamelModel):
    """Deposit receipt without its logs bloom."""

    status: HexNumber | None = None
    root: Hash | None = None
    cumulative_gas_used: HexNumber
    logs: List[LogModel]
    deposit_nonce: HexNumber | None = None
    deposit_receipt_version: HexNumber | None = None

    @field_validator("deposit_nonce", "deposit_receipt_version")
    @classmethod
    def check_u64(cls, value: HexNumber | None) -> HexNumber | None:
        """Deposit quantities are 64-bit unsigned integers."""
        if value is not None and value > int(U64.MAX_VALUE):
            raise ValueError(f"quantity does not fit in 64 bits: {value:#x}")
        return value

    @model_validator(mode="after")
    def check_status(self) -> "DepositReceiptModel":
        """Exactly one of `status` and `root` must be given."""
        if (self.status is None) == (self.root is None):
            raise ValueError("exactly one of `status` and `root` is required")
        if self.status is not None and self.status > 1:
            raise ValueError(f"invalid receipt status {self.status}")
        return self

    @classmethod
    def from_receipt(cls, receipt: DepositReceipt) -> "DepositReceiptModel":
        """Build the model of `receipt`."""
        return cls(**_receipt_fields(receipt))

    def to_status(self) -> ReceiptStatus:
        """Status of the receipt, as stored in `Receipt`."""
        if self.root is not None:
            return Bytes32(self.root)
        return self.status == 1

    def to_receipt(self) -> DepositReceipt:
        """Convert back into a `DepositReceipt`."""
        return DepositReceipt(
            inner=Receipt(
                status=self.to_status(),
                cumulative_gas_used=Uint(self.cumulative_gas_used),
                logs=tuple(log.to_log() for log in self.logs),
            ),
            deposit_nonce=_optional_u64(self.deposit_nonce),
            deposit_receipt_version=_optional_u64(
                self.deposit_receipt_version
            ),
        )


class DepositReceiptWithBloomModel(DepositReceiptModel):
    """Deposit receipt together with its logs bloom."""

    logs_bloom: Bloom

    @classmethod
    def from_receipt_with_bloom(
        cls, receipt: DepositReceiptWithBloom
    ) -> "DepositReceiptWithBloomModel":
        """Build the model of `receipt`, keeping its bloom as is."""
        return cls(
            **_receipt_fields(receipt.receipt),
            logs_bloom=Bloom(receipt.logs_bloom),
        )

    def to_receipt_with_bloom(self) -> DepositReceiptWithBloom:
        """Convert back into a `DepositReceiptWithBloom`, trusting the bloom."""
        return DepositReceiptWithBloom(
            receipt=self.to_receipt(),
            logs_bloom=Bytes256(self.logs_bloom),
        )


def _optional_u64(value: HexNumber | None) -> U64 | None:
    if value is None:
        return None
    return U64(int(value))


def _receipt_fields(receipt: DepositReceipt) -> Dict[str, Any]:
    status = receipt.inner.status
    fields: Dict[str, Any] = {
        "cumulative_gas_used": HexNumber(int(receipt.cumulative_gas_used)),
        "logs": [LogModel.from_log(log) for log in receipt.logs],
    }
    if isinstance(status, bool):
        fields["status"] = HexNumber(int(status))
    else:
        fields["root"] = Hash(status)
    if receipt.deposit_nonce is not None:
        fields["deposit_nonce"] = HexNumber(int(receipt.deposit_nonce))
    if receipt.deposit_receipt_version is not None:
        fields["deposit_receipt_version"] = HexNumber(
            int(receipt.deposit_receipt_version)
        )
    return fields


def to_json(
    receipt: Union[DepositReceipt, DepositReceiptWithBloom]
) -> Dict[str, Any]:
    """
    Serialize `receipt` into its JSON form.
    """
    model: DepositReceiptModel
    if isinstance(receipt, DepositReceiptWithBloom):
        model = DepositReceiptWithBloomModel.from_receipt_with_bloom(receipt)
    else:
        model = DepositReceiptModel.from_receipt(receipt)
    return model.serialize(mode="json", by_alias=True)


def receipt_from_json(data: Mapping[str, Any]) -> DepositReceipt:
    """
    Parse the JSON form of a receipt. A `logsBloom` key, if any, is ignored.
    """
    return DepositReceiptModel.model_validate(data).to_receipt()


def receipt_with_bloom_from_json(
    data: Mapping[str, Any]
) -> DepositReceiptWithBloom:
    """
    Parse the JSON form of a receipt carrying its logs bloom.
    """
    model = DepositReceiptWithBloomModel.model_validate(data)
    return model.to_receipt_with_bloom()
