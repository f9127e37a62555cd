"""Byte helpers and hex/base64 codecs shared by the attacks and the runners."""

import base64
from binascii import hexlify, unhexlify
from itertools import cycle
from pathlib import Path
from typing import List

from Crypto.Util.strxor import strxor, strxor_c


def byte_xor(a: bytes, b: bytes) -> bytes:
    """XOR between two byte sequences (stops at shortest)."""
    n = min(len(a), len(b))
    if n == 0:
        return b""
    return strxor(a[:n], b[:n])


def xor_single(data: bytes, key: int) -> bytes:
    """XOR every byte of data with the same key byte."""
    if not data:
        return b""
    return strxor_c(data, key)


def xor_repeating(data: bytes, key: bytes) -> bytes:
    """XOR data with key repeated over its whole length."""
    if not key:
        raise ValueError("Key must not be empty")
    return bytes(x ^ k for x, k in zip(data, cycle(key)))


def hamming_distance(a: bytes, b: bytes) -> int:
    """Number of differing bits (popcount of a xor b)."""
    return sum(bin(x).count("1") for x in byte_xor(a, b))


def chunks(data: bytes, size: int) -> List[bytes]:
    return [data[i:i + size] for i in range(0, len(data), size)]


def transpose(data: bytes, size: int) -> List[bytes]:
    """Group i holds every byte at a position congruent to i mod size."""
    return [data[i::size] for i in range(size)]


# codecs
def hex_to_bytes(s: str) -> bytes:
    return unhexlify(s.strip())


def bytes_to_hex(b: bytes) -> str:
    return hexlify(b).decode()


def hex_to_base64(s: str) -> str:
    return base64.b64encode(hex_to_bytes(s)).decode()


def base64_to_bytes(s: str) -> bytes:
    # fixtures are often wrapped over several lines
    return base64.b64decode("".join(s.split()))


def read_base64_file(path) -> bytes:
    """Load a base64 file (possibly split over several lines) as raw bytes."""
    return base64_to_bytes(Path(path).read_text())


def read_hex_lines(path) -> List[bytes]:
    """Load a file with one hex string per line, skipping blank lines."""
    lines = Path(path).read_text().splitlines()
    return [hex_to_bytes(line) for line in lines if line.strip()]
