#!/usr/bin/env python3
"""
AES-128 ECB profile cookie forgery (cut-and-paste).

Principle:
  1. The oracle returns ECB(k, "email=<email>&uid=10&role=user") and strips
     '&' and '=' from the email, so "role=admin" cannot be injected.
  2. Pick an email length so that "email=...&uid=10&role=" ends exactly on a
     block boundary: the leading blocks end right before the role value.
  3. Pick a second email so that one block holds exactly
     "admin" + PKCS#7 padding (11 bytes of 0x0b).
  4. Splice: leading blocks of (2) + the admin block of (3). Every block is
     a valid ECB block under the same key, and the last one carries valid
     padding, so the forged cookie decrypts to role=admin.

Usage: python3 -m blockattack.attack.ecb.token_forgery
"""

from blockattack.aes.padding import pad
from blockattack.aes.primitive import BLOCK_SIZE

EMAIL_DOMAIN = "@bar.com"
LEAD = "email="                # before the email
TAIL = "&uid=10&role="         # between the email and the role value


def _aligned_email(length: int) -> str:
    """An email address of exactly `length` characters (length >= 1)."""
    if length <= len(EMAIL_DOMAIN):
        return "f" * length
    return "f" * (length - len(EMAIL_DOMAIN)) + EMAIL_DOMAIN


def base_blocks(oracle, block_size: int = BLOCK_SIZE) -> bytes:
    """Ciphertext blocks of 'email=...&uid=10&role=', ending on a block boundary."""
    fixed = len(LEAD) + len(TAIL)
    email_length = -fixed % block_size or block_size
    total = fixed + email_length
    return oracle.encrypt_profile(_aligned_email(email_length))[:total]


def role_block(oracle, role: str = "admin", block_size: int = BLOCK_SIZE) -> bytes:
    """A ciphertext block whose plaintext is role + PKCS#7 padding."""
    filler = "A" * (-len(LEAD) % block_size)
    start = len(LEAD) + len(filler)
    crafted = pad(role.encode(), block_size).decode("latin-1")
    return oracle.encrypt_profile(filler + crafted)[start:start + block_size]


def forge_admin_profile(oracle, block_size: int = BLOCK_SIZE) -> bytes:
    """Ciphertext that the oracle decrypts to a profile with role=admin."""
    return base_blocks(oracle, block_size) + role_block(oracle, "admin", block_size)


if __name__ == "__main__":
    from blockattack.oracles import ProfileOracle

    print("AES-128 ECB profile forgery\n")
    oracle = ProfileOracle()

    print("[*] Direct injection attempt:", oracle.profile_for("foo@bar.com&role=admin"))

    base = base_blocks(oracle)
    admin = role_block(oracle)
    print(f"Base blocks: {base.hex()}")
    print(f"Admin block: {admin.hex()}")

    forged = base + admin
    profile = oracle.decrypt_profile(forged)
    print(f"\nForged cookie: {forged.hex()}")
    print(f"Decrypted    : {profile}")
    print("[+] role =", profile.get("role"))
