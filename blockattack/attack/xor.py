#!/usr/bin/env python3
"""
Single-byte and repeating-key XOR cryptanalysis.

Principle:
  - Single byte: try all 256 keys, keep the decryption that looks most like
    English (letter frequencies, see blockattack.text).
  - Key size: two chunks of English XORed with the same key are closer in
    Hamming distance (~2-3 bits/byte) than random bytes (~4 bits/byte), so
    the size whose chunks have the smallest normalized distance is likely
    the key length.
  - Full key: transpose the ciphertext into `size` columns, each one is a
    single-byte XOR, solve them independently.

Usage: python3 -m blockattack.attack.xor
"""

from itertools import combinations
from typing import Iterable, List, NamedTuple, Optional, Tuple

from blockattack.text import score
from blockattack.utils import byte_xor, chunks, hamming_distance, transpose, xor_repeating, xor_single

DEFAULT_KEYSIZES = range(2, 41)


class XorGuess(NamedTuple):
    score: float
    plaintext: str
    key: int


class KeySizeCandidate(NamedTuple):
    score: float
    size: int


def fixed_xor(a: bytes, b: bytes) -> bytes:
    """XOR of two equal-length buffers."""
    if len(a) != len(b):
        raise ValueError(f"Buffers differ in length ({len(a)} != {len(b)})")
    return byte_xor(a, b)


def repeating_key_xor(data: bytes, key: bytes) -> bytes:
    return xor_repeating(data, key)


def single_byte_brute_force(ciphertext: bytes) -> Optional[XorGuess]:
    """Best (score, plaintext, key) over all 256 keys; first key wins ties."""
    best = None
    for key in range(256):
        try:
            decoded = xor_single(ciphertext, key).decode("utf-8")
        except UnicodeDecodeError:
            continue
        s = score(decoded)
        if best is None or s > best.score:
            best = XorGuess(s, decoded, key)
    return best


def find_single_byte_xor(ciphertexts: Iterable[bytes]) -> Optional[XorGuess]:
    """Among several ciphertexts, the single-byte XOR decryption that scores best."""
    best = None
    for ciphertext in ciphertexts:
        guess = single_byte_brute_force(ciphertext)
        if guess is not None and (best is None or guess.score > best.score):
            best = guess
    return best


def rank_keysizes(ciphertext: bytes, sizes: Iterable[int] = DEFAULT_KEYSIZES,
                  num_chunks: int = 4) -> List[KeySizeCandidate]:
    """Key sizes sorted by mean normalized Hamming distance between chunk pairs."""
    candidates = []
    for size in sizes:
        blocks = [c for c in chunks(ciphertext, size) if len(c) == size][:num_chunks]
        if len(blocks) < 2:
            continue
        dists = [hamming_distance(a, b) / size for a, b in combinations(blocks, 2)]
        candidates.append(KeySizeCandidate(sum(dists) / len(dists), size))
    candidates.sort()
    return candidates


def keysize_candidates(ciphertext: bytes, sizes: Iterable[int] = DEFAULT_KEYSIZES,
                       limit: int = 3, num_chunks: int = 4) -> List[int]:
    return [c.size for c in rank_keysizes(ciphertext, sizes, num_chunks)[:limit]]


def recover_repeating_key(ciphertext: bytes, size: int) -> Optional[bytes]:
    key = bytearray()
    for column in transpose(ciphertext, size):
        guess = single_byte_brute_force(column)
        if guess is None:
            return None
        key.append(guess.key)
    return bytes(key)


def break_repeating_key_xor(ciphertext: bytes, sizes: Iterable[int] = DEFAULT_KEYSIZES,
                            limit: int = 3, num_chunks: int = 4) -> Optional[Tuple[bytes, bytes]]:
    """
    Recover (key, plaintext) of a repeating-key XOR ciphertext.

    A key is rebuilt for each of the `limit` most likely sizes and the one
    whose decryption scores best is kept.
    """
    best = None
    best_score = float("-inf")
    for size in keysize_candidates(ciphertext, sizes, limit, num_chunks):
        key = recover_repeating_key(ciphertext, size)
        if key is None:
            continue
        plaintext = xor_repeating(ciphertext, key)
        s = score(plaintext.decode("utf-8", errors="replace"))
        if s > best_score:
            best, best_score = (key, plaintext), s
    return best


if __name__ == "__main__":
    print("Repeating-key XOR cryptanalysis\n")

    message = (
        b"Burning 'em, if you ain't quick and nimble\n"
        b"I go crazy when I hear a cymbal and a hi hat with a souped up tempo\n"
        b"I'm on a roll, it's time to go solo, rollin' in my five point oh\n"
        b"with my rag top down so my hair can blow, the girlies on standby\n"
        b"waving just to say hi, did you stop? no, I just drove by"
    )
    ciphertext = repeating_key_xor(message, b"ICE")
    print("Ciphertext:", ciphertext.hex()[:64], "...")

    print("[*] Ranking key sizes...")
    for candidate in rank_keysizes(ciphertext, range(2, 16), num_chunks=8)[:5]:
        print(f"    size {candidate.size:2d}: {candidate.score:.3f}")

    result = break_repeating_key_xor(ciphertext, range(2, 16), limit=5, num_chunks=8)
    if result is None:
        print("[-] No key found")
    else:
        key, plaintext = result
        print(f"[+] Key: {key!r}")
        print(plaintext.decode(errors="replace"))
