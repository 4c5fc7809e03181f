import random

import pytest

from decimal_rsa.block_cipher import (
    BlockCipher,
    CipherParams,
    decrypt_digits,
    encrypt_digits,
)
from decimal_rsa.digit_codec import decode_digits, encode_text
from decimal_rsa.errors import MalformedInputError
from decimal_rsa.rsa_from_scratch import KeyPair, KeyPairGenerator, inv_mod

N = 1009 * 2011
PHI = 1008 * 2010
E = 17
D = inv_mod(E, PHI)
KNOWN = KeyPair(n=N, e=E, d=D)


def test_hi5_end_to_end():
    params = CipherParams.for_modulus(N)
    assert params.block_width == 7

    digits = encode_text("Hi5")
    assert digits == "431805"

    cipher = encrypt_digits(digits, E, N, params)
    assert len(cipher) == 2 * 7
    assert cipher == str(pow(4318, E, N)).zfill(7) + str(pow(599, E, N)).zfill(7)

    recovered = decrypt_digits(cipher, D, N, params)
    assert recovered == "43180599"
    assert recovered.startswith("431805")
    assert decode_digits(recovered) == "Hi5"


def test_aligned_input_gets_no_padding():
    params = CipherParams.for_modulus(N)
    cipher = encrypt_digits("43180536", E, N, params)
    assert len(cipher) == 14
    assert decrypt_digits(cipher, D, N, params) == "43180536"


def test_block_roundtrip_generated_key(rng):
    key = KeyPairGenerator(rng=rng).generate()
    gen = random.Random(3)
    values = [0, 1, 2, key.n - 1] + [gen.randrange(key.n) for _ in range(200)]
    for v in values:
        assert pow(pow(v, key.e, key.n), key.d, key.n) == v


def test_group_roundtrip_generated_key(rng):
    key = KeyPairGenerator(rng=rng).generate()
    cipher = BlockCipher(key)
    for v in (0, 7, 99, 1234, 9999):
        digits = f"{v:04d}"
        assert cipher.decrypt_digits(cipher.encrypt_digits(digits)) == digits


def test_blocks_are_fixed_width():
    params = CipherParams.for_modulus(N)
    # 0 and 1 are fixed points of RSA and need the most zero padding.
    cipher = encrypt_digits("00000001", E, N, params)
    assert cipher == "0000000" + "0000001"


def test_padding_marker_is_configurable():
    params = CipherParams.for_modulus(N, padding_marker=7)
    cipher = encrypt_digits("43", E, N, params)
    assert decrypt_digits(cipher, D, N, params) == "4307"


def test_misaligned_after_padding_is_rejected():
    params = CipherParams.for_modulus(N, group_length=5)
    with pytest.raises(MalformedInputError):
        encrypt_digits("43", E, N, params)


def test_odd_group_length_realigns_when_two_short():
    params = CipherParams.for_modulus(N, group_length=3)
    cipher = encrypt_digits("4318", E, N, params)
    assert decrypt_digits(cipher, D, N, params) == "431899"


def test_empty_input():
    params = CipherParams.for_modulus(N)
    assert encrypt_digits("", E, N, params) == ""
    assert decrypt_digits("", D, N, params) == ""


@pytest.mark.parametrize("cipher", ["123456", "12345678", "12345a7"])
def test_malformed_ciphertext(cipher):
    with pytest.raises(MalformedInputError):
        decrypt_digits(cipher, D, N, CipherParams.for_modulus(N))


def test_non_digit_plaintext_rejected():
    with pytest.raises(MalformedInputError):
        encrypt_digits("43x8", E, N, CipherParams.for_modulus(N))


@pytest.mark.parametrize(
    "kwargs",
    [
        {"block_width": 0},
        {"block_width": 7, "group_length": 0},
        {"block_width": 7, "padding_marker": 100},
        {"block_width": 7, "padding_marker": -1},
    ],
)
def test_params_validation(kwargs):
    with pytest.raises(ValueError):
        CipherParams(**kwargs)


def test_block_cipher_text_roundtrip():
    cipher = BlockCipher(KNOWN)
    ct = cipher.encrypt("Meet me at 10pm, OK?")
    assert cipher.decrypt(ct) == "Meetmeat10pmOK"


def test_block_cipher_requires_modulus_above_group_range():
    small = KeyPair(n=61 * 53, e=17, d=2753)
    with pytest.raises(ValueError):
        BlockCipher(small)
    # Two-digit groups fit below n = 3233.
    cipher = BlockCipher(small, CipherParams.for_modulus(small.n, group_length=2))
    assert cipher.decrypt(cipher.encrypt("Hi5")) == "Hi5"


def test_block_cipher_rejects_narrow_blocks():
    with pytest.raises(ValueError):
        BlockCipher(KNOWN, CipherParams(block_width=6))
