"""
Raw AES-128 block primitive.

The mode layer never calls AES on more than one block at a time: chaining,
padding and block splitting are done by hand in `modes.py`, so this wrapper
is the only place that talks to pycryptodome's cipher object.
"""

from Crypto.Cipher import AES

BLOCK_SIZE = 16   # bytes, 128-bit blocks
KEY_SIZE = 16     # bytes, AES-128


class AESBlockCipher:
    """Single-block AES encryption/decryption (ECB on exactly one block)."""

    block_size = BLOCK_SIZE

    def _check(self, key: bytes, block: bytes) -> None:
        if len(key) not in AES.key_size:
            raise ValueError(f"Invalid AES key length ({len(key)} bytes)")
        if len(block) != self.block_size:
            raise ValueError(f"Block must be {self.block_size} bytes, got {len(block)}")

    def encrypt_block(self, key: bytes, block: bytes) -> bytes:
        self._check(key, block)
        return AES.new(key, AES.MODE_ECB).encrypt(block)

    def decrypt_block(self, key: bytes, block: bytes) -> bytes:
        self._check(key, block)
        return AES.new(key, AES.MODE_ECB).decrypt(block)


AES128 = AESBlockCipher()
