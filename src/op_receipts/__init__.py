"""
OP Stack Deposit Receipts
^^^^^^^^^^^^^^^^^^^^^^^^^

Receipts of deposit transactions on the OP Stack carry, on top of the usual
execution summary, a deposit nonce (introduced in Regolith) and a deposit
receipt version (introduced in Canyon). Both are appended to the RLP list of
the receipt only when present, so a decoder has to infer them from the
declared length of the list.

This package contains the receipt values, the cached logs bloom wrapper and
the RLP codec for them.
"""

__version__ = "0.1.0"
