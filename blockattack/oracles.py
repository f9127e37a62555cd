"""
Encryption oracles.

Each oracle simulates a vulnerable service: it owns a secret key (through a
key policy) and only exposes byte-in/byte-out operations. Attack code gets
the oracle object or one of its bound methods, never the key.

Key policies:
  - FixedKey: one key for the lifetime of the oracle (a typical server).
  - PerCallKey: a fresh key on every call (independent sessions).
"""

import abc
from typing import Dict, NamedTuple, Optional, Sequence, Tuple

from blockattack.aes.modes import cbc_decrypt, cbc_encrypt, ecb_decrypt, ecb_encrypt
from blockattack.aes.primitive import BLOCK_SIZE, KEY_SIZE
from blockattack.rng import RandomSource, default_source
from blockattack.utils import base64_to_bytes


class FixedKey:
    def __init__(self, rng: RandomSource, size: int = KEY_SIZE):
        self._key = rng.random_bytes(size)

    def session_key(self) -> bytes:
        return self._key


class PerCallKey:
    def __init__(self, rng: RandomSource, size: int = KEY_SIZE):
        self._rng = rng
        self._size = size

    def session_key(self) -> bytes:
        return self._rng.random_bytes(self._size)


class Oracle(abc.ABC):
    """Base oracle: holds a randomness source and a key policy."""

    key_policy = FixedKey

    def __init__(self, rng: Optional[RandomSource] = None):
        self._rng = default_source(rng)
        self._keys = self.key_policy(self._rng)

    @abc.abstractmethod
    def encrypt(self, data: bytes):
        """
        Encrypt attacker-supplied bytes.

        The result is whatever the simulated service hands back: plain
        ciphertext bytes for the suffix, profile and bit-flipping oracles, a
        ModeSample for ModeDetectionOracle, an (iv, ciphertext) pair for
        PaddingOracle.
        """


class ModeSample(NamedTuple):
    ciphertext: bytes
    cbc: bool


class ModeDetectionOracle(Oracle):
    """
    Encrypts under a fresh random key every call, wrapping the input between
    5-9 random bytes on each side, in ECB or CBC (coin flip).
    """

    key_policy = PerCallKey

    def encrypt(self, data: bytes) -> ModeSample:
        """Ciphertext plus the mode actually used (ground truth for scoring, not for the attacker)."""
        key = self._keys.session_key()
        prefix = self._rng.random_bytes(self._rng.randint(5, 9))
        suffix = self._rng.random_bytes(self._rng.randint(5, 9))
        plaintext = prefix + data + suffix
        if self._rng.coin():
            iv = self._rng.random_bytes(BLOCK_SIZE)
            return ModeSample(cbc_encrypt(key, iv, plaintext), True)
        return ModeSample(ecb_encrypt(key, plaintext), False)


UNKNOWN_SUFFIX = base64_to_bytes(
    "Um9sbGluJyBpbiBteSA1LjAKV2l0aCBteSByYWctdG9wIGRvd24gc28gbXkg"
    "aGFpciBjYW4gYmxvdwpUaGUgZ2lybGllcyBvbiBzdGFuZGJ5IHdhdmluZyBq"
    "dXN0IHRvIHNheSBoaQpEaWQgeW91IHN0b3A/IE5vLCBJIGp1c3QgZHJvdmUg"
    "YnkK"
)


class UnknownSuffixOracle(Oracle):
    """ECB(key, data || secret suffix) under a key fixed for the oracle's lifetime."""

    def __init__(self, suffix: bytes = UNKNOWN_SUFFIX, rng: Optional[RandomSource] = None):
        super().__init__(rng)
        self._suffix = suffix

    def encrypt(self, data: bytes) -> bytes:
        """ECB(key, data || suffix)."""
        return ecb_encrypt(self._keys.session_key(), data + self._suffix)


class ProfileOracle(Oracle):
    """
    Issues ECB-encrypted profile cookies: email=<email>&uid=10&role=user.
    The email is sanitized ('&' and '=' removed) so a caller cannot write
    role=admin directly.
    """

    uid = "10"
    role = "user"

    @staticmethod
    def encode(pairs: Sequence[Tuple[str, str]]) -> str:
        return "&".join(f"{key}={value}" for key, value in pairs)

    @staticmethod
    def parse(cookie: str) -> Dict[str, str]:
        """Parse k=v&k=v; the first '=' of a token splits key from value."""
        profile = {}
        for token in cookie.split("&"):
            key, _, value = token.partition("=")
            profile[key] = value
        return profile

    def profile_for(self, email: str) -> str:
        sanitized = email.replace("&", "").replace("=", "")
        return self.encode([("email", sanitized), ("uid", self.uid), ("role", self.role)])

    def encrypt_profile(self, email: str) -> bytes:
        return ecb_encrypt(self._keys.session_key(), self.profile_for(email).encode())

    def decrypt_profile(self, ciphertext: bytes) -> Dict[str, str]:
        plaintext = ecb_decrypt(self._keys.session_key(), ciphertext)
        return self.parse(plaintext.decode("utf-8", errors="replace"))

    def encrypt(self, data: bytes) -> bytes:
        """Bytes-in form of encrypt_profile, the email decoded as UTF-8."""
        return self.encrypt_profile(data.decode("utf-8", errors="replace"))


class BitFlippingOracle(Oracle):
    """
    CBC-encrypts user data inside a fixed comment template, with a key and IV
    fixed for the oracle's lifetime. ';' and '=' are stripped from the input
    but nothing protects the ciphertext itself.
    """

    PREFIX = b"comment1=cooking%20MCs;userdata="
    SUFFIX = b";comment2=%20like%20a%20pound%20of%20bacon"
    ADMIN_TOKEN = ";admin=true;"

    def __init__(self, rng: Optional[RandomSource] = None):
        super().__init__(rng)
        self._iv = self._rng.random_bytes(BLOCK_SIZE)

    def encrypt(self, user_data: bytes) -> bytes:
        sanitized = user_data.replace(b";", b"").replace(b"=", b"")
        plaintext = self.PREFIX + sanitized + self.SUFFIX
        return cbc_encrypt(self._keys.session_key(), self._iv, plaintext)

    def decrypt(self, ciphertext: bytes) -> str:
        plaintext = cbc_decrypt(self._keys.session_key(), self._iv, ciphertext)
        # latin-1 keeps one character per byte, garbage blocks included
        return plaintext.decode("latin-1")

    @classmethod
    def contains_admin_true(cls, plaintext: str) -> bool:
        return cls.ADMIN_TOKEN in plaintext

    def is_admin(self, ciphertext: bytes) -> bool:
        return self.contains_admin_true(self.decrypt(ciphertext))


PADDING_ORACLE_MESSAGES = [
    b"Every block chained to the one before it",
    b"The padding was valid, so the server said nothing",
    b"One bit of information per request is plenty",
    b"Sixteen bytes at a time, right to left",
    b"An IV is not a secret, but it is not yours to pick",
    b"Encrypt-then-MAC would have stopped all of this",
    b"short",
    b"exactly sixteen!",
]


class PaddingOracle(Oracle):
    """
    Hands out CBC encryptions of one of its secret messages and answers a
    single question about any ciphertext: is the padding valid?
    """

    def __init__(self, messages: Sequence[bytes] = PADDING_ORACLE_MESSAGES,
                 rng: Optional[RandomSource] = None):
        super().__init__(rng)
        self._messages = list(messages)

    def encrypt(self, data: Optional[bytes] = None) -> Tuple[bytes, bytes]:
        """Return (iv, ciphertext) of `data`, or of a random secret message."""
        message = data if data is not None else self._rng.choice(self._messages)
        iv = self._rng.random_bytes(BLOCK_SIZE)
        return iv, cbc_encrypt(self._keys.session_key(), iv, message)

    def padding_valid(self, iv: bytes, ciphertext: bytes) -> bool:
        try:
            cbc_decrypt(self._keys.session_key(), iv, ciphertext)
        except ValueError:
            return False
        return True
