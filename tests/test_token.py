import re

import pytest

from zkintel.commitment import generate
from zkintel.exceptions import MalformedProof
from zkintel.token import ProofToken, encode, is_well_formed, parse


FORMAT = re.compile(r"^zkp_[0-9a-f]+_.{4}$")


@pytest.mark.parametrize(
    "commitment,nonce",
    [("deadbeef", "abcd"), ("1", "k9x2mq"), ("0f" * 32, "0000000000z")],
)
def test_encode_format(commitment, nonce):
    proof = encode(commitment, nonce)
    assert FORMAT.match(proof)
    assert proof == "zkp_{}_{}".format(commitment, nonce[:4])


def test_encode_deterministic():
    assert encode("abc123", "q1w2e3") == encode("abc123", "q1w2e3")


def test_encode_generated():
    for _ in range(20):
        nonce, commitment = generate("indicator")
        assert FORMAT.match(encode(commitment, nonce))


@pytest.mark.parametrize(
    "commitment,nonce", [("", "abcd"), ("abcd", ""), ("abcd", "abc"), ("abcd", None)]
)
def test_encode_rejects_bad_input(commitment, nonce):
    with pytest.raises(ValueError):
        encode(commitment, nonce)


def test_parse():
    token = parse("zkp_deadbeef_abcd")
    assert token == ProofToken("deadbeef", "abcd")
    assert str(token) == "zkp_deadbeef_abcd"


def test_parse_inverts_encode():
    nonce, commitment = generate("indicator")
    token = parse(encode(commitment, nonce))
    assert token.commitment == commitment
    assert token.nonce_prefix == nonce[:4]


@pytest.mark.parametrize(
    "proof",
    [
        "zkp_x_y",
        "zkp_deadbeef_abc",
        "zkp_deadbeef_abcde",
        "zkp_DEADBEEF_abcd",
        "zkp__abcd",
        "proof_deadbeef_abcd",
        "zkp_deadbeef_ab\ncd",
        "",
        None,
        42,
    ],
)
def test_parse_malformed(proof):
    with pytest.raises(MalformedProof):
        parse(proof)
    assert not is_well_formed(proof)


def test_malformed_proof_is_value_error():
    with pytest.raises(ValueError):
        parse("garbage")
