"""
PKCS#7 padding.

`strip` reports bad padding with None instead of raising: it
runs on attacker-controlled plaintext, and whether it succeeds is exactly
the signal a padding oracle leaks.
"""

from typing import Optional

from .primitive import BLOCK_SIZE


def pad(data: bytes, length: int) -> bytes:
    """Pad `data` to exactly `length` bytes with PKCS#7 padding."""
    count = length - len(data)
    if count < 0:
        raise ValueError(f"Padded size {length} is less than original size {len(data)}")
    if count > 255:
        raise ValueError(f"Padding length {count} exceeds 255 bytes")
    return data + bytes([count]) * count


def pad_to_block(data: bytes, block_size: int = BLOCK_SIZE) -> bytes:
    """Pad to the next multiple of block_size (a whole block if already aligned)."""
    return pad(data, (len(data) // block_size + 1) * block_size)


def strip(data: bytes) -> Optional[bytes]:
    """Remove PKCS#7 padding, or return None if the padding is invalid."""
    if not data:
        return None
    count = data[-1]
    if count == 0 or count > len(data):
        return None
    if data[-count:] != bytes([count]) * count:
        return None
    return data[:-count]
