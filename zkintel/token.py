"""
Proof tokens.

A proof token packs a commitment and the first characters of its nonce into a single portable
string: ``zkp_<commitment>_<nonce prefix>``.
"""

import re

import attr

from zkintel.consts import NONCE_PREFIX_LENGTH, PROOF_PREFIX, PROOF_SEPARATOR
from zkintel.exceptions import MalformedProof


TOKEN_PATTERN = re.compile(
    r"{}([0-9a-f]+){}(.{{{}}})".format(
        re.escape(PROOF_PREFIX), re.escape(PROOF_SEPARATOR), NONCE_PREFIX_LENGTH
    )
)


@attr.s(frozen=True)
class ProofToken:
    """Parsed proof token."""

    commitment = attr.ib()
    nonce_prefix = attr.ib()

    def __str__(self):
        return PROOF_PREFIX + self.commitment + PROOF_SEPARATOR + self.nonce_prefix


def encode(commitment, nonce):
    """
    Build the proof token of a commitment.

    >>> encode("3f2a", "k9x2mq")
    'zkp_3f2a_k9x2'

    Args:
        commitment (str): Hex commitment.
        nonce (str): Nonce used for the commitment. Only its prefix ends up in the token.
    """
    if not commitment:
        raise ValueError("Cannot encode an empty commitment")
    if not nonce or len(nonce) < NONCE_PREFIX_LENGTH:
        raise ValueError(
            "The nonce must have at least {} characters".format(NONCE_PREFIX_LENGTH)
        )
    return str(ProofToken(commitment, nonce[:NONCE_PREFIX_LENGTH]))


def parse(proof):
    """
    Split a proof token into its commitment and nonce prefix.

    >>> parse("zkp_deadbeef_abcd")
    ProofToken(commitment='deadbeef', nonce_prefix='abcd')

    Raises:
        MalformedProof: If the proof is not a well-formed token.
    """
    match = TOKEN_PATTERN.fullmatch(proof) if isinstance(proof, str) else None
    if match is None:
        raise MalformedProof("Not a proof token: {!r}".format(proof))
    return ProofToken(*match.groups())


def is_well_formed(proof):
    """
    Tell if ``proof`` is a well-formed token.

    >>> is_well_formed("zkp_x_y")
    False
    """
    try:
        parse(proof)
    except MalformedProof:
        return False
    return True
