#!/usr/bin/env python3
"""
Vaudenay Attack - CBC Padding Oracle

Decrypts AES-CBC ciphertext with nothing but a yes/no answer to "is the
padding valid?".

Attack process:
  1. For each ciphertext block, forge the block before it (attack block)
  2. Attack the target block byte-by-byte from right to left: find the
     attack byte that makes the padding valid, which reveals the
     intermediate value D_K(C) at that position
  3. Plaintext = intermediate value xor real previous block (or IV)
  4. Reconstruct the message and strip its padding

Usage: python3 -m blockattack.attack.cbc.padding_oracle
"""

from typing import Callable, List

from blockattack.aes.padding import strip
from blockattack.aes.primitive import BLOCK_SIZE
from blockattack.utils import byte_xor, chunks

PaddingCheck = Callable[[bytes, bytes], bool]


def attack_byte(padding_valid: PaddingCheck, target_block: bytes, byte_pos: int,
                known: List[int]) -> int:
    """
    Attack single byte at specified position

    Args:
        padding_valid: oracle, (iv, ciphertext) -> bool
        target_block: ciphertext block being attacked
        byte_pos: position of byte to attack (left to right)
        known: intermediate values already discovered (right of byte_pos)

    Returns:
        Intermediate value of attacked byte
    """
    block_size = len(target_block)
    padding_value = block_size - byte_pos

    attack_block = bytearray(block_size)
    for i in range(byte_pos + 1, block_size):
        attack_block[i] = known[i] ^ padding_value

    for guess in range(256):
        attack_block[byte_pos] = guess
        if not padding_valid(bytes(attack_block), target_block):
            continue
        if padding_value == 1 and byte_pos > 0:
            # rule out an accidental \x02\x02 (or longer) ending
            attack_block[byte_pos - 1] ^= 0xFF
            confirmed = padding_valid(bytes(attack_block), target_block)
            attack_block[byte_pos - 1] ^= 0xFF
            if not confirmed:
                continue
        return guess ^ padding_value

    raise ValueError(f"Unable to find byte at position {byte_pos}")


def attack_block(padding_valid: PaddingCheck, previous_block: bytes, target_block: bytes) -> bytes:
    """Recover the plaintext of one block given the block (or IV) before it."""
    intermediate = [0] * len(target_block)
    for byte_pos in range(len(target_block) - 1, -1, -1):
        intermediate[byte_pos] = attack_byte(padding_valid, target_block, byte_pos, intermediate)
    return byte_xor(bytes(intermediate), previous_block)


def padding_oracle_attack(padding_valid: PaddingCheck, iv: bytes, ciphertext: bytes,
                          block_size: int = BLOCK_SIZE, verbose: bool = False) -> bytes:
    """
    Execute complete padding oracle attack

    Returns:
        The decrypted message, padding removed
    """
    blocks = chunks(ciphertext, block_size)
    if not blocks or len(blocks[-1]) != block_size:
        raise ValueError("Ciphertext must be a positive multiple of the block size")

    plaintext = b""
    for i, block in enumerate(blocks):
        previous = iv if i == 0 else blocks[i - 1]
        plaintext += attack_block(padding_valid, previous, block)
        if verbose:
            print(f"[+] Block {i + 1}/{len(blocks)}: {plaintext[-block_size:]!r}")

    message = strip(plaintext)
    if message is None:
        raise ValueError("Recovered plaintext has invalid padding")
    return message


if __name__ == "__main__":
    from blockattack.oracles import PaddingOracle

    print("Starting padding oracle attack...\n")
    oracle = PaddingOracle()
    iv, ciphertext = oracle.encrypt()
    print(f"Received {len(ciphertext)} bytes ({len(ciphertext) // BLOCK_SIZE} blocks)\n")

    message = padding_oracle_attack(oracle.padding_valid, iv, ciphertext, verbose=True)
    print(f"\nDecrypted message:\n{message.decode(errors='replace')}")
