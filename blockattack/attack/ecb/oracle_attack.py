#!/usr/bin/env python3
"""
ECB Oracle Attack - Byte-by-byte recovery of an unknown suffix.

Principle:
  - The oracle returns ECB(key, input || secret).
  - Send B - 1 - (i mod B) filler bytes: the i-th secret byte becomes the
    last byte of a block whose other B - 1 bytes are known (filler followed
    by the secret bytes already recovered).
  - Try the 256 values for that last byte and keep the one whose block
    matches the reference ciphertext block.
  - The number of bytes to recover comes from the output-length jump, so
    the attack never tries to "recover" the PKCS#7 padding.

Usage: python3 -m blockattack.attack.ecb.oracle_attack
"""

from typing import Callable, Optional

from blockattack.attack.ecb.detection import detect_block_size

FILLER = b"\x00"


def suffix_length(encrypt: Callable[[bytes], bytes], block_size: int) -> Optional[int]:
    """Detects secret length by observing when padding causes a new block."""
    initial_length = len(encrypt(b""))
    for i in range(1, block_size + 1):
        if len(encrypt(FILLER * i)) > initial_length:
            return initial_length - i
    return None


def recover_suffix(encrypt: Callable[[bytes], bytes], block_size: Optional[int] = None,
                   verbose: bool = False) -> Optional[bytes]:
    """
    Recovers the secret appended by the oracle one byte at a time.

    Args:
        encrypt: oracle, attacker bytes -> ECB(input || secret)
        block_size: cipher block size, detected when not given
        verbose: print progress

    Returns:
        The secret, cut short if a byte cannot be matched, or None if the
        block size or the secret length cannot be determined.
    """
    if block_size is None:
        block_size = detect_block_size(encrypt)
        if block_size is None:
            return None
    length = suffix_length(encrypt, block_size)
    if length is None:
        return None
    if verbose:
        print(f"[+] Block size: {block_size} bytes, secret length: {length} bytes")

    recovered = b""
    for i in range(length):
        # align the target byte to the end of a block
        padding = FILLER * (block_size - 1 - (i % block_size))
        start = (i // block_size) * block_size
        reference_block = encrypt(padding)[start:start + block_size]

        for candidate in range(256):
            test_block = encrypt(padding + recovered + bytes([candidate]))[start:start + block_size]
            if test_block == reference_block:
                recovered += bytes([candidate])
                break
        else:
            if verbose:
                print(f"[-] No match for byte {i}, stopping")
            return recovered

        if verbose and (i + 1) % block_size == 0:
            print(f"[+] Progress: {recovered!r}")
    return recovered


if __name__ == "__main__":
    from blockattack.attack.ecb.detection import detect_ecb
    from blockattack.oracles import UnknownSuffixOracle

    print("[*] Starting ECB Oracle Attack...")
    oracle = UnknownSuffixOracle()

    block_size = detect_block_size(oracle.encrypt)
    print(f"[+] AES Block Size: {block_size} bytes")
    print(f"[+] ECB mode: {detect_ecb(oracle.encrypt(bytes(4 * block_size)), block_size)}")

    print("[*] Recovering secret...")
    secret = recover_suffix(oracle.encrypt, block_size, verbose=True)
    print(f"\n[+] Recovered secret:\n{secret.decode(errors='replace')}")
