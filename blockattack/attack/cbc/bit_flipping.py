#!/usr/bin/env python3
"""
AES-128 CBC bit-flipping attack.

Principle:
  - In CBC: P_i = D(C_i) xor C_{i-1}.
  - Flipping bit b of C_{i-1} flips bit b of P_i (P_{i-1} turns to garbage).
  - Submit two blocks of a harmless placeholder ('A' * 32) right after the
    32-byte prefix. Block 2 will be sacrificed, block 3 is the target.
  - XOR block 2 of the ciphertext with 'A' xor ';admin=true;' so that block 3
    decrypts to the forbidden characters, after sanitization already ran.

Usage: python3 -m blockattack.attack.cbc.bit_flipping
"""

from blockattack.aes.primitive import BLOCK_SIZE

PLACEHOLDER = b"A"
TARGET = b";admin=true;"


def flip(ciphertext: bytes, offset: int, known: bytes, wanted: bytes) -> bytes:
    """XOR known ^ wanted into the ciphertext starting at offset."""
    forged = bytearray(ciphertext)
    for i, (k, w) in enumerate(zip(known, wanted)):
        forged[offset + i] ^= k ^ w
    return bytes(forged)


def inject_admin(oracle, block_size: int = BLOCK_SIZE, prefix_length: int = 32) -> bytes:
    """
    Ciphertext that the oracle decrypts to a string containing ';admin=true;'.

    Args:
        oracle: CBC oracle wrapping user data between a fixed prefix and suffix
        block_size: cipher block size
        prefix_length: length of the oracle's fixed prefix (public template)

    Returns:
        The tampered ciphertext.
    """
    if len(TARGET) > block_size:
        raise ValueError("Target does not fit in a single block")
    # first whole block of attacker data, then the one after it
    sacrificed = -(-prefix_length // block_size) * block_size
    filler = PLACEHOLDER * (sacrificed - prefix_length + 2 * block_size)
    ciphertext = oracle.encrypt(filler)
    return flip(ciphertext, sacrificed, PLACEHOLDER * len(TARGET), TARGET)


if __name__ == "__main__":
    from blockattack.oracles import BitFlippingOracle

    print("AES-128 CBC bit-flipping\n")
    oracle = BitFlippingOracle()

    honest = oracle.encrypt(b";admin=true;")
    print("[*] Direct injection:", oracle.decrypt(honest))
    print("    admin?", oracle.is_admin(honest))

    forged = inject_admin(oracle)
    print("\n[*] Tampered ciphertext:", forged.hex())
    print("    Decrypted:", repr(oracle.decrypt(forged)))
    print("[+] admin?", oracle.is_admin(forged))
