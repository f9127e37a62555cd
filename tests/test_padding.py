"""
Test PKCS#7 padding
"""

import pytest

from blockattack.aes.padding import pad, pad_to_block, strip


def test_pad_yellow_submarine():
    assert pad(b"YELLOW SUBMARINE", 20) == b"YELLOW SUBMARINE\x04\x04\x04\x04"


def test_pad_rejects_shorter_target():
    with pytest.raises(ValueError):
        pad(b"YELLOW SUBMARINE", 15)


def test_pad_rejects_more_than_255_bytes():
    with pytest.raises(ValueError):
        pad(b"abc", 3 + 256)
    assert len(pad(b"abc", 3 + 255)) == 258


def test_pad_to_block_adds_full_block_when_aligned():
    assert pad_to_block(b"A" * 16) == b"A" * 16 + b"\x10" * 16
    assert pad_to_block(b"") == b"\x10" * 16
    assert pad_to_block(b"A" * 15) == b"A" * 15 + b"\x01"


def test_round_trip_every_pad_count():
    data = b"ICE ICE BABY"
    for count in range(1, 256):
        padded = pad(data, len(data) + count)
        assert len(padded) == len(data) + count
        assert strip(padded) == data


def test_strip_valid():
    assert strip(b"ICE ICE BABY\x04\x04\x04\x04") == b"ICE ICE BABY"
    assert strip(b"\x01") == b""


def test_strip_invalid():
    assert strip(b"ICE ICE BABY\x01\x02\x03\x04") is None
    assert strip(b"ICE ICE BABY\x05\x05\x05\x05") is None
    assert strip(b"") is None
    assert strip(b"ICE ICE BABY\x00") is None
    # count larger than the data itself
    assert strip(b"\x03\x03") is None


def test_strip_never_raises_on_arbitrary_bytes():
    for last in range(256):
        for body in (b"", b"A", bytes(range(40))):
            result = strip(body + bytes([last]))
            assert result is None or isinstance(result, bytes)
