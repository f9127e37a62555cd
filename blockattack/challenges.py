"""
Challenge runners: each one wires fixed inputs (or a fresh oracle) into the
attack library and returns the outcome.
"""

from typing import Dict, Optional

from blockattack.aes.padding import pad, strip
from blockattack.attack.cbc.bit_flipping import inject_admin
from blockattack.attack.cbc.padding_oracle import padding_oracle_attack
from blockattack.attack.ecb.detection import detect_block_size, detect_ecb, mode_detection_success_rate
from blockattack.attack.ecb.oracle_attack import recover_suffix
from blockattack.attack.ecb.token_forgery import forge_admin_profile
from blockattack.attack.xor import fixed_xor, single_byte_brute_force
from blockattack.oracles import (
    BitFlippingOracle, ModeDetectionOracle, PaddingOracle, ProfileOracle, UnknownSuffixOracle,
)
from blockattack.rng import RandomSource
from blockattack.utils import bytes_to_hex, hex_to_base64, hex_to_bytes


def challenge_1() -> str:
    """Convert hex to base64."""
    return hex_to_base64(
        "49276d206b696c6c696e6720796f757220627261696e206c"
        "696b65206120706f69736f6e6f7573206d757368726f6f6d"
    )


def challenge_2() -> str:
    """Fixed XOR."""
    return bytes_to_hex(fixed_xor(
        hex_to_bytes("1c0111001f010100061a024b53535009181c"),
        hex_to_bytes("686974207468652062756c6c277320657965"),
    ))


def challenge_3() -> Optional[str]:
    """Single-byte XOR cipher."""
    guess = single_byte_brute_force(hex_to_bytes(
        "1b37373331363f78151b7f2b783431333d78397828372d363c78373e783a393b3736"
    ))
    return guess.plaintext if guess else None


def challenge_9() -> bytes:
    """Implement PKCS#7 padding."""
    return pad(b"YELLOW SUBMARINE", 20)


def challenge_11(trials: int = 100, rng: Optional[RandomSource] = None) -> float:
    """An ECB/CBC detection oracle; returns the detection success rate."""
    return mode_detection_success_rate(ModeDetectionOracle(rng=rng), trials)


def challenge_12(rng: Optional[RandomSource] = None, verbose: bool = False) -> Optional[bytes]:
    """Byte-at-a-time ECB decryption (simple)."""
    oracle = UnknownSuffixOracle(rng=rng)
    block_size = detect_block_size(oracle.encrypt)
    if block_size is None:
        return None
    if not detect_ecb(oracle.encrypt(bytes(4 * block_size)), block_size):
        return None
    return recover_suffix(oracle.encrypt, block_size, verbose=verbose)


def challenge_13(rng: Optional[RandomSource] = None) -> Dict[str, str]:
    """ECB cut-and-paste; returns the decrypted forged profile."""
    oracle = ProfileOracle(rng=rng)
    return oracle.decrypt_profile(forge_admin_profile(oracle))


def challenge_15() -> Dict[str, Optional[bytes]]:
    """PKCS#7 padding validation."""
    samples = [
        b"ICE ICE BABY\x04\x04\x04\x04",
        b"ICE ICE BABY\x05\x05\x05\x05",
        b"ICE ICE BABY\x01\x02\x03\x04",
    ]
    return {repr(s): strip(s) for s in samples}


def challenge_16(rng: Optional[RandomSource] = None) -> bool:
    """CBC bit-flipping; True if the forged ciphertext grants admin."""
    oracle = BitFlippingOracle(rng=rng)
    return oracle.is_admin(inject_admin(oracle))


def challenge_17(rng: Optional[RandomSource] = None, verbose: bool = False) -> bytes:
    """The CBC padding oracle; returns the decrypted secret message."""
    oracle = PaddingOracle(rng=rng)
    iv, ciphertext = oracle.encrypt()
    return padding_oracle_attack(oracle.padding_valid, iv, ciphertext, verbose=verbose)
