"""Hex encoded primitives of the JSON form of receipts."""

from typing import Any, ClassVar, Type

from pydantic import GetCoreSchemaHandler
from pydantic_core.core_schema import (
    PlainValidatorFunctionSchema,
    no_info_plain_validator_function,
    to_string_ser_schema,
)

from .conversions import (
    BytesConvertible,
    NumberConvertible,
    to_bytes,
    to_fixed_size_bytes,
    to_number,
)


class ToStringSchema:
    """
    Type converter to add a simple pydantic schema that correctly
    parses and serializes the type.
    """

    @staticmethod
    def __get_pydantic_core_schema__(
        source_type: Any, handler: GetCoreSchemaHandler
    ) -> PlainValidatorFunctionSchema:
        """Call the class constructor without info and appends the serialization schema."""
        return no_info_plain_validator_function(
            source_type,
            serialization=to_string_ser_schema(),
        )


class HexNumber(int, ToStringSchema):
    """Unsigned quantity, rendered as a `0x` prefixed hex string without padding."""

    def __new__(cls, input_number: NumberConvertible):
        """Create a new HexNumber object."""
        number = to_number(input_number)
        if number < 0:
            raise ValueError(f"quantity must not be negative: {number}")
        return super(HexNumber, cls).__new__(cls, number)

    def __str__(self) -> str:
        """Return the quantity as a hex string."""
        return hex(self)


class Bytes(bytes, ToStringSchema):
    """Byte string of variable length, rendered as `0x` prefixed hex."""

    def __new__(cls, input_bytes: BytesConvertible = b""):
        """Create a new Bytes object."""
        if type(input_bytes) is cls:
            return input_bytes
        return super(Bytes, cls).__new__(cls, to_bytes(input_bytes))

    def __hash__(self) -> int:
        """Return the hash of the bytes."""
        return super(Bytes, self).__hash__()

    def __str__(self) -> str:
        """Return the hexadecimal representation of the bytes."""
        return "0x" + self.hex()


class FixedSizeBytes(Bytes):
    """Byte string of a length fixed by the subclass."""

    byte_length: ClassVar[int]

    def __class_getitem__(cls, length: int) -> Type["FixedSizeBytes"]:
        """Create a new FixedSizeBytes class with the given length."""

        class Sized(cls):  # type: ignore
            byte_length = length

        return Sized

    def __new__(cls, input_bytes: BytesConvertible):
        """Create a new FixedSizeBytes object."""
        if type(input_bytes) is cls:
            return input_bytes
        return super(FixedSizeBytes, cls).__new__(
            cls, to_fixed_size_bytes(input_bytes, cls.byte_length)
        )


class Address(FixedSizeBytes[20]):  # type: ignore
    """Account address."""

    pass


class Hash(FixedSizeBytes[32]):  # type: ignore
    """Keccak-256 hash, used for topics and post-state roots."""

    pass


class Bloom(FixedSizeBytes[256]):  # type: ignore
    """Logs bloom."""

    pass
