"""
Test CBC bit flipping and the padding oracle attack
"""

import pytest

from blockattack.attack.cbc.bit_flipping import TARGET, flip, inject_admin
from blockattack.attack.cbc.padding_oracle import attack_block, padding_oracle_attack
from blockattack.oracles import PADDING_ORACLE_MESSAGES, BitFlippingOracle, PaddingOracle
from blockattack.rng import SeededRandomSource


def test_flip():
    assert flip(b"\x00" * 4, 1, b"AB", b"AC") == b"\x00\x00\x01\x00"


def test_inject_admin(rng):
    oracle = BitFlippingOracle(rng=rng)
    forged = inject_admin(oracle)
    assert oracle.is_admin(forged)
    assert TARGET.decode() in oracle.decrypt(forged)


@pytest.mark.parametrize("seed", range(5))
def test_inject_admin_any_key(seed):
    oracle = BitFlippingOracle(rng=SeededRandomSource(seed))
    assert oracle.is_admin(inject_admin(oracle))


def test_padding_oracle_single_block(rng):
    oracle = PaddingOracle(rng=rng)
    iv, ciphertext = oracle.encrypt(b"short")
    assert attack_block(oracle.padding_valid, iv, ciphertext) == b"short" + b"\x0b" * 11


@pytest.mark.parametrize("message", PADDING_ORACLE_MESSAGES)
def test_padding_oracle_attack(rng, message):
    oracle = PaddingOracle(rng=rng)
    iv, ciphertext = oracle.encrypt(message)
    assert padding_oracle_attack(oracle.padding_valid, iv, ciphertext) == message


def test_padding_oracle_attack_secret_message(rng):
    oracle = PaddingOracle(rng=rng)
    iv, ciphertext = oracle.encrypt()
    assert padding_oracle_attack(oracle.padding_valid, iv, ciphertext) in PADDING_ORACLE_MESSAGES


@pytest.mark.parametrize("seed", range(10))
def test_padding_oracle_attack_many_keys(seed):
    # the last byte guess can hit an accidental \x02\x02 ending for some keys
    oracle = PaddingOracle(rng=SeededRandomSource(seed))
    iv, ciphertext = oracle.encrypt(b"exactly sixteen!")
    assert padding_oracle_attack(oracle.padding_valid, iv, ciphertext) == b"exactly sixteen!"


def test_padding_oracle_attack_rejects_misaligned(rng):
    oracle = PaddingOracle(rng=rng)
    with pytest.raises(ValueError):
        padding_oracle_attack(oracle.padding_valid, bytes(16), bytes(17))
    with pytest.raises(ValueError):
        padding_oracle_attack(oracle.padding_valid, bytes(16), b"")
