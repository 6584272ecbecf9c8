"""
Error types raised while building, encoding and decoding receipts.
"""

from ethereum_rlp.exceptions import DecodingError


class OpReceiptException(Exception):
    """
    Base class for all non codec exceptions raised by this package.
    """


class InvalidDepositReceipt(OpReceiptException):
    """
    Thrown when a deposit receipt carries a receipt version but no deposit
    nonce.
    """


class UnexpectedString(DecodingError):
    """
    Thrown when an RLP list was expected but the header describes a string.
    """


class ListLengthMismatch(DecodingError):
    """
    Thrown when the bytes consumed while decoding a list differ from the
    payload length declared by its header.
    """

    expected: int
    got: int

    def __init__(self, expected: int, got: int) -> None:
        super().__init__(
            f"list length mismatch: expected {expected} byte(s), "
            f"got {got} byte(s)"
        )
        self.expected = expected
        self.got = got


class TrailingBytes(DecodingError):
    """
    Thrown when bytes are left over after decoding a single receipt.
    """
