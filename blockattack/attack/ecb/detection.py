#!/usr/bin/env python3
"""
ECB detection and block size discovery.

Principle:
  - ECB is deterministic per block: a plaintext with repeated blocks gives a
    ciphertext with repeated blocks. CBC chaining hides the repetition.
  - Block size: feed the oracle 1, 2, 3, ... identical bytes. As soon as the
    input fills the first block, the first block of ciphertext no longer
    changes when one more byte is added. The input length at which the
    leading bytes become stable is the block size.
  - Cross-check: the ciphertext length grows by exactly one block once the
    input pushes the padding over a boundary.

Usage: python3 -m blockattack.attack.ecb.detection
"""

from collections import Counter
from typing import Callable, Optional

from blockattack.aes.primitive import BLOCK_SIZE
from blockattack.utils import chunks

MAX_BLOCK_SIZE_ATTEMPTS = 40
STABLE_CONFIRMATIONS = 3   # extra sizes the leading bytes must survive


def max_block_repetitions(data: bytes, block_size: int = BLOCK_SIZE) -> int:
    """Highest number of occurrences of any single block (0 for empty data)."""
    counts = Counter(chunks(data, block_size))
    return max(counts.values(), default=0)


def detect_ecb(data: bytes, block_size: int = BLOCK_SIZE) -> bool:
    """True if some block occurs more than once (heuristic, false negatives possible)."""
    return max_block_repetitions(data, block_size) > 1


def detect_block_size(encrypt: Callable[[bytes], bytes],
                      max_attempts: int = MAX_BLOCK_SIZE_ATTEMPTS,
                      filler: bytes = b"A") -> Optional[int]:
    """
    Smallest input length n whose first n ciphertext bytes stay unchanged
    while the input keeps growing.

    When the ciphertext length jumps as the input grows, a candidate must
    also equal the size of that jump: a secret starting with filler bytes
    makes the leading bytes stabilize too early.

    Args:
        encrypt: oracle, attacker bytes -> ciphertext
        max_attempts: largest input length to try
        filler: byte repeated to build the input

    Returns:
        The block size, or None if nothing stabilizes within max_attempts.
    """
    jump = length_jump(encrypt, max_attempts, filler)
    outputs = [encrypt(filler * n) for n in range(1, STABLE_CONFIRMATIONS + 2)]
    for n in range(1, max_attempts + 1):
        leading = outputs[0][:n]
        stable = len(outputs[0]) >= n and all(out[:n] == leading for out in outputs[1:])
        if stable and (jump is None or n == jump):
            return n
        outputs = outputs[1:] + [encrypt(filler * (n + STABLE_CONFIRMATIONS + 1))]
    return None


def length_jump(encrypt: Callable[[bytes], bytes],
                max_attempts: int = MAX_BLOCK_SIZE_ATTEMPTS,
                filler: bytes = b"A") -> Optional[int]:
    """Detects block size by observing ciphertext length changes (None if it never grows)."""
    initial_length = len(encrypt(b""))
    for i in range(1, max_attempts + 1):
        new_length = len(encrypt(filler * i))
        if new_length > initial_length:
            return new_length - initial_length
    return None


def detect_mode(encrypt: Callable[[bytes], bytes], block_size: int = BLOCK_SIZE) -> bool:
    """
    Chosen-plaintext ECB test: 64 zero bytes give at least two identical full
    blocks whatever short prefix the oracle adds. True means ECB.
    """
    return detect_ecb(encrypt(bytes(4 * block_size)), block_size)


def mode_detection_success_rate(oracle, trials: int = 100, block_size: int = BLOCK_SIZE) -> float:
    """Fraction of trials where detect_mode matches the oracle's real mode."""
    if trials <= 0:
        raise ValueError("trials must be positive")
    success = 0
    for _ in range(trials):
        sample = oracle.encrypt(bytes(4 * block_size))
        if detect_ecb(sample.ciphertext, block_size) != sample.cbc:
            success += 1
    return success / trials


if __name__ == "__main__":
    from blockattack.oracles import ModeDetectionOracle, UnknownSuffixOracle

    print("ECB detection\n")

    oracle = ModeDetectionOracle()
    print("[*] Guessing the mode of 20 random encryptions...")
    for _ in range(20):
        sample = oracle.encrypt(bytes(64))
        guess = "ECB" if detect_ecb(sample.ciphertext) else "CBC"
        real = "CBC" if sample.cbc else "ECB"
        print(f"    guess {guess} / real {real}")
    print(f"[+] Success rate over 1000 trials: {mode_detection_success_rate(oracle, 1000):.2%}")

    suffix_oracle = UnknownSuffixOracle()
    print(f"[+] Block size of the suffix oracle: {detect_block_size(suffix_oracle.encrypt)}")
