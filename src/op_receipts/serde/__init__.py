"""
JSON interchange form of receipts.
"""

from .models import (
    DepositReceiptModel,
    DepositReceiptWithBloomModel,
    LogModel,
    receipt_from_json,
    receipt_with_bloom_from_json,
    to_json,
)

__all__ = (
    "DepositReceiptModel",
    "DepositReceiptWithBloomModel",
    "LogModel",
    "receipt_from_json",
    "receipt_with_bloom_from_json",
    "to_json",
)
