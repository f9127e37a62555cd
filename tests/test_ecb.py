"""
Test ECB detection, byte-at-a-time suffix recovery and cookie forgery
"""

import pytest

from blockattack.aes.modes import cbc_encrypt, ecb_encrypt
from blockattack.attack.ecb.detection import (
    detect_block_size, detect_ecb, detect_mode, length_jump, max_block_repetitions,
    mode_detection_success_rate,
)
from blockattack.attack.ecb.oracle_attack import recover_suffix, suffix_length
from blockattack.attack.ecb.token_forgery import base_blocks, forge_admin_profile, role_block
from blockattack.oracles import UNKNOWN_SUFFIX, ModeDetectionOracle, ProfileOracle, UnknownSuffixOracle
from blockattack.rng import SeededRandomSource

KEY = b"YELLOW SUBMARINE"
IV = bytes(16)


def test_max_block_repetitions():
    assert max_block_repetitions(b"") == 0
    assert max_block_repetitions(b"A" * 16 + b"B" * 16) == 1
    assert max_block_repetitions(b"A" * 48 + b"B" * 16) == 3


def test_detect_ecb():
    plaintext = b"A" * 16 * 64
    assert detect_ecb(ecb_encrypt(KEY, plaintext))
    assert not detect_ecb(cbc_encrypt(KEY, IV, plaintext))
    assert not detect_ecb(ecb_encrypt(KEY, bytes(range(64))))


def test_detect_mode():
    oracle = UnknownSuffixOracle(rng=SeededRandomSource(1))
    assert detect_mode(oracle.encrypt)
    assert not detect_mode(lambda data: cbc_encrypt(KEY, IV, data))


def test_detect_block_size(rng):
    oracle = UnknownSuffixOracle(rng=rng)
    assert detect_block_size(oracle.encrypt) == 16


def test_detect_block_size_gives_up():
    oracle = UnknownSuffixOracle(rng=SeededRandomSource(3))
    assert detect_block_size(oracle.encrypt, max_attempts=8) is None


def test_length_jump(rng):
    oracle = UnknownSuffixOracle(rng=rng)
    assert length_jump(oracle.encrypt) == 16
    assert length_jump(lambda data: bytes(32), max_attempts=5) is None


def test_block_size_with_suffix_starting_like_the_filler(rng):
    # leading bytes stop changing at 2 bytes, the length jump says 16
    suffix = b"A" * 14 + b"secret tail"
    oracle = UnknownSuffixOracle(suffix, rng=rng)
    assert detect_block_size(oracle.encrypt) == 16
    assert recover_suffix(oracle.encrypt) == suffix


def test_suffix_length(rng):
    for suffix in (b"", b"x", b"sixteen byte msg", UNKNOWN_SUFFIX):
        oracle = UnknownSuffixOracle(suffix, rng=rng)
        assert suffix_length(oracle.encrypt, 16) == len(suffix)


def test_recover_unknown_suffix(rng):
    oracle = UnknownSuffixOracle(rng=rng)
    assert recover_suffix(oracle.encrypt) == UNKNOWN_SUFFIX


@pytest.mark.parametrize("seed", range(5))
@pytest.mark.parametrize("suffix", [
    b"",
    b"hi",
    b"sixteen byte msg",
    b"two blocks of secret text here!!",
    bytes(range(1, 40)),
])
def test_recover_short_suffixes(seed, suffix):
    oracle = UnknownSuffixOracle(suffix, rng=SeededRandomSource(seed))
    assert recover_suffix(oracle.encrypt, 16) == suffix


def test_mode_detection_success_rate(rng):
    assert mode_detection_success_rate(ModeDetectionOracle(rng=rng), 200) == 1.0


def test_mode_detection_needs_trials(rng):
    with pytest.raises(ValueError):
        mode_detection_success_rate(ModeDetectionOracle(rng=rng), 0)


def test_token_forgery_blocks(rng):
    oracle = ProfileOracle(rng=rng)
    assert len(base_blocks(oracle)) == 32
    assert len(role_block(oracle)) == 16


def test_forge_admin_profile(rng):
    oracle = ProfileOracle(rng=rng)
    profile = oracle.decrypt_profile(forge_admin_profile(oracle))
    assert profile["role"] == "admin"
    assert profile["uid"] == "10"
