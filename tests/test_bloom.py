import pytest
from ethereum_types.bytes import Bytes20

from op_receipts.bloom import add_to_bloom, bloom_contains, logs_bloom
from op_receipts.crypto.hash import keccak256
from op_receipts.fork_types import EMPTY_BLOOM

from .helpers import LEGACY_LOG, make_log

OTHER_LOG = make_log(
    "0xfaca325c86bf9c2d5b413cd7b90b209be92229c2",
    "0x8cca58667b1e9ffa004720ac99a3d61a138181963b294d270d91c53d36402ae2",
)


def count_bits(data: bytes) -> int:
    return sum(bin(byte).count("1") for byte in data)


def test_empty_logs_give_empty_bloom() -> None:
    assert logs_bloom(()) == EMPTY_BLOOM
    assert len(logs_bloom(())) == 256


@pytest.mark.parametrize(
    "entry", [b"", b"\x00" * 20, keccak256(b"Transfer(address,address,uint256)")]
)
def test_add_to_bloom_sets_up_to_three_bits(entry: bytes) -> None:
    bloom = bytearray(256)
    add_to_bloom(bloom, entry)
    assert 1 <= count_bits(bloom) <= 3
    assert bloom_contains(bytes(bloom), entry)


def test_add_to_bloom_bit_positions() -> None:
    entry = b"\x01" * 20
    hash = keccak256(entry)
    bloom = bytearray(256)
    add_to_bloom(bloom, entry)

    expected = bytearray(256)
    for idx in (0, 2, 4):
        bit = int.from_bytes(hash[idx : idx + 2], "big") & 0x07FF
        expected[255 - bit // 8] |= 1 << (bit % 8)
    assert bloom == expected


def test_logs_bloom_contains_addresses_and_topics() -> None:
    bloom = logs_bloom((LEGACY_LOG, OTHER_LOG))
    for log in (LEGACY_LOG, OTHER_LOG):
        assert bloom_contains(bloom, log.address)
        for topic in log.topics:
            assert bloom_contains(bloom, topic)


def test_logs_bloom_ignores_data() -> None:
    assert logs_bloom((LEGACY_LOG,)) == logs_bloom(
        (make_log(LEGACY_LOG.address.hex(), *(t.hex() for t in LEGACY_LOG.topics)),)
    )


def test_logs_bloom_is_union_of_logs() -> None:
    both = logs_bloom((LEGACY_LOG, OTHER_LOG))
    union = bytes(
        a | b
        for a, b in zip(logs_bloom((LEGACY_LOG,)), logs_bloom((OTHER_LOG,)))
    )
    assert both == union
    assert logs_bloom((OTHER_LOG, LEGACY_LOG)) == both


def test_bloom_does_not_contain_absent_entry() -> None:
    bloom = logs_bloom((LEGACY_LOG,))
    absent = [
        Bytes20(bytes([i]) * 20)
        for i in range(32)
        if not bloom_contains(bloom, Bytes20(bytes([i]) * 20))
    ]
    assert absent
