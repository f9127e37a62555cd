"""
ECB and CBC modes built by hand on top of a single-block primitive.

Principle:
  - ECB: every block is encrypted on its own, so equal plaintext blocks give
    equal ciphertext blocks and blocks can be cut and reordered freely.
  - CBC: C_i = E(P_i xor C_{i-1}) with C_{-1} = IV, and
    P_i = D(C_i) xor C_{i-1}. Flipping a bit of C_{i-1} flips the same bit
    of P_i and turns P_{i-1} into garbage.

Decoding raises ValueError on misaligned input or malformed padding, the
same way Crypto.Util.Padding.unpad does.
"""

from Crypto.Util.strxor import strxor

from ..utils import chunks
from .padding import pad_to_block, strip
from .primitive import AES128


def _check_aligned(ciphertext: bytes, block_size: int) -> None:
    if not ciphertext or len(ciphertext) % block_size:
        raise ValueError(
            f"Ciphertext length {len(ciphertext)} is not a positive multiple of {block_size}"
        )


def _unpad(padded: bytes) -> bytes:
    plaintext = strip(padded)
    if plaintext is None:
        raise ValueError("Padding is incorrect.")
    return plaintext


def ecb_encrypt(key: bytes, plaintext: bytes, cipher=AES128) -> bytes:
    """Pad plaintext and encrypt each block independently."""
    padded = pad_to_block(plaintext, cipher.block_size)
    return b"".join(cipher.encrypt_block(key, block)
                    for block in chunks(padded, cipher.block_size))


def ecb_decrypt(key: bytes, ciphertext: bytes, unpad: bool = True, cipher=AES128) -> bytes:
    """Decrypt each block independently, then strip the padding."""
    _check_aligned(ciphertext, cipher.block_size)
    padded = b"".join(cipher.decrypt_block(key, block)
                      for block in chunks(ciphertext, cipher.block_size))
    return _unpad(padded) if unpad else padded


def cbc_encrypt(key: bytes, iv: bytes, plaintext: bytes, cipher=AES128) -> bytes:
    """Pad plaintext and encrypt it in CBC mode."""
    if len(iv) != cipher.block_size:
        raise ValueError(f"IV must be {cipher.block_size} bytes, got {len(iv)}")
    padded = pad_to_block(plaintext, cipher.block_size)
    previous = iv
    blocks = []
    for block in chunks(padded, cipher.block_size):
        previous = cipher.encrypt_block(key, strxor(block, previous))
        blocks.append(previous)
    return b"".join(blocks)


def cbc_decrypt(key: bytes, iv: bytes, ciphertext: bytes, unpad: bool = True, cipher=AES128) -> bytes:
    """Decrypt CBC ciphertext, then strip the padding."""
    if len(iv) != cipher.block_size:
        raise ValueError(f"IV must be {cipher.block_size} bytes, got {len(iv)}")
    _check_aligned(ciphertext, cipher.block_size)
    previous = iv
    blocks = []
    for block in chunks(ciphertext, cipher.block_size):
        blocks.append(strxor(cipher.decrypt_block(key, block), previous))
        previous = block
    padded = b"".join(blocks)
    return _unpad(padded) if unpad else padded
