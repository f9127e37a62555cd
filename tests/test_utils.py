"""
Test byte helpers, codecs and the randomness sources
"""

import pytest

from blockattack.rng import SeededRandomSource, SystemRandomSource, default_source
from blockattack.utils import (
    base64_to_bytes, byte_xor, bytes_to_hex, chunks, hex_to_bytes, read_base64_file,
    read_hex_lines, transpose, xor_repeating, xor_single,
)


def test_byte_xor_stops_at_shortest():
    assert byte_xor(b"\x0f\xf0\xff", b"\xff\xff") == b"\xf0\x0f"
    assert byte_xor(b"", b"abc") == b""


def test_xor_single():
    assert xor_single(b"\x00\x03", 0x41) == b"AB"
    assert xor_single(b"", 0x41) == b""


def test_xor_repeating():
    assert xor_repeating(b"\x00\x00\x00\x00\x00", b"ab") == b"ababa"
    with pytest.raises(ValueError):
        xor_repeating(b"data", b"")


def test_chunks_and_transpose():
    assert chunks(b"abcdefg", 3) == [b"abc", b"def", b"g"]
    assert transpose(b"abcdefg", 3) == [b"adg", b"be", b"cf"]


def test_hex_codecs():
    assert hex_to_bytes("deadbeef\n") == b"\xde\xad\xbe\xef"
    assert bytes_to_hex(b"\xde\xad\xbe\xef") == "deadbeef"


def test_base64_ignores_line_breaks():
    assert base64_to_bytes("SGVs\nbG8g\r\nd29y bGQ=") == b"Hello world"


def test_read_base64_file(tmp_path):
    path = tmp_path / "data.txt"
    path.write_text("SGVsbG8g\nd29ybGQ=\n")
    assert read_base64_file(path) == b"Hello world"


def test_read_hex_lines(tmp_path):
    path = tmp_path / "lines.txt"
    path.write_text("00ff\n\n4142\n")
    assert read_hex_lines(str(path)) == [b"\x00\xff", b"AB"]


def test_seeded_source_is_reproducible():
    a, b = SeededRandomSource(42), SeededRandomSource(42)
    assert a.random_bytes(16) == b.random_bytes(16)
    assert [a.randint(5, 9) for _ in range(20)] == [b.randint(5, 9) for _ in range(20)]


def test_randint_is_inclusive():
    rng = SeededRandomSource(0)
    values = {rng.randint(5, 9) for _ in range(500)}
    assert values == {5, 6, 7, 8, 9}


def test_choice_and_coin():
    rng = SeededRandomSource(0)
    assert {rng.choice("abc") for _ in range(200)} == {"a", "b", "c"}
    assert {rng.coin() for _ in range(200)} == {True, False}


def test_system_source():
    rng = SystemRandomSource()
    assert len(rng.random_bytes(16)) == 16
    assert 1 <= rng.randint(1, 3) <= 3
    assert isinstance(default_source(), SystemRandomSource)
    seeded = SeededRandomSource()
    assert default_source(seeded) is seeded
