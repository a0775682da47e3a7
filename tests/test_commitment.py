import random
import re
import logging

import pytest

from zkintel.commitment import (
    CommitmentScheme,
    DigestScheme,
    GeneratedCommitment,
    generate,
    get_scheme,
    register_scheme,
    secret_material,
)
from zkintel.digest import sha256_digest
from zkintel.exceptions import (
    InsecureDigestWarning,
    UnknownSchemeError,
    UnsupportedOperationError,
)


HEX = re.compile(r"^[0-9a-f]+$")
SECRETS = [
    "a4b3c2d1e5f6a7b8c9d0e1f2a3b4c5d6",
    "198.51.100.7",
    "malicious.example.org",
    "https://evil.example/payload.exe",
    "  padded secret  ",
    "ünïcödé",
]


@pytest.mark.parametrize("secret", SECRETS)
def test_generate_shapes(secret):
    nonce, commitment = generate(secret)
    assert HEX.match(commitment)
    assert len(nonce) >= 4


@pytest.mark.parametrize("secret", SECRETS)
def test_generate_rolling_shapes(secret):
    with pytest.warns(InsecureDigestWarning):
        nonce, commitment = generate(secret, scheme="rolling")
    assert HEX.match(commitment)
    assert len(nonce) >= 4


@pytest.mark.parametrize("secret", ["", "   ", "\t\n", None])
def test_generate_refuses_blank(secret):
    assert generate(secret) is None


def test_generate_rejects_non_string():
    with pytest.raises(TypeError):
        generate(b"bytes secret")


def test_generate_is_randomized():
    results = [generate("same secret") for _ in range(200)]
    assert len({r.nonce for r in results}) == 200
    assert len({r.commitment for r in results}) == 200


def test_generate_seeded_rng_is_reproducible():
    a = generate("ioc", rng=random.Random(3))
    b = generate("ioc", rng=random.Random(3))
    assert a == b


def test_commitment_is_digest_of_secret_nonce_salt():
    result = generate("ioc")
    expected = sha256_digest(("ioc" + result.nonce + "salt").encode("utf-8"))
    assert result.commitment == expected
    assert result.scheme == "sha256"


def test_generated_commitment_proof():
    result = generate("ioc")
    assert result.proof == "zkp_{}_{}".format(result.commitment, result.nonce[:4])


def test_generated_commitment_hides_nonce_in_repr():
    result = GeneratedCommitment(nonce="supersecretnonce", commitment="abcd")
    assert "supersecretnonce" not in repr(result)


def test_secret_not_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="zkintel"):
        result = generate("do-not-log-me")
    assert result is not None
    assert "do-not-log-me" not in caplog.text
    assert result.nonce not in caplog.text


def test_secret_not_kept_on_result():
    result = generate("do-not-keep-me")
    assert "do-not-keep-me" not in repr(result)
    assert all(value != "do-not-keep-me" for value in vars(result).values())


def test_secret_material_zeroed_on_error():
    with pytest.raises(RuntimeError):
        with secret_material("secret", "nonce") as material:
            raise RuntimeError("boom")
    assert bytes(material) == bytes(len(material))
    assert len(material) == len("secretnonce")


def test_get_scheme():
    assert get_scheme().name == "sha256"
    assert get_scheme("rolling").name == "rolling"
    scheme = DigestScheme("custom", sha256_digest)
    assert get_scheme(scheme) is scheme


def test_unknown_scheme():
    with pytest.raises(UnknownSchemeError):
        generate("ioc", scheme="md5")


def test_register_custom_scheme():
    class ReversedScheme(CommitmentScheme):
        name = "test-reversed"

        def commit(self, secret, nonce):
            return sha256_digest((nonce + secret).encode("utf-8"))

    register_scheme(ReversedScheme())
    result = generate("ioc", scheme="test-reversed")
    assert result.scheme == "test-reversed"
    assert HEX.match(result.commitment)


def test_knowledge_unsupported_for_digests():
    with pytest.raises(UnsupportedOperationError):
        generate("ioc", prove_knowledge=True)
