r"""
Pedersen commitments to threat indicators.

The commitment to a secret is :math:`C = m G + r H`, where :math:`m` is the hash of the secret
and the salt reduced modulo the group order, and :math:`r` is a random blinding scalar. The nonce
is a random four-character tag followed by the base-36 rendering of :math:`r`, so the proof token
carries only the tag. The commitment is the hex encoding of the compressed point :math:`C`, and
the scheme fits the same ``(nonce, commitment)`` contract as the digest
schemes. Unlike them it supports proofs of knowledge, see :py:mod:`zkintel.knowledge`.

>>> from zkintel.commitment import generate
>>> result = generate("198.51.100.7", scheme="pedersen", prove_knowledge=True)
>>> result.scheme
'pedersen'
>>> PedersenScheme().open("198.51.100.7", result.nonce, result.commitment)
True
"""

import binascii
import logging

from petlib.ec import EcPt

from zkintel.commitment import CommitmentScheme, register_scheme, secret_material
from zkintel.consts import DEFAULT_GROUP, NONCE_PREFIX_LENGTH, PEDERSEN_LABELS, SALT
from zkintel.exceptions import MalformedCommitment
from zkintel.knowledge import OpeningStmt
from zkintel.nonce import draw_nonce, draw_scalar, get_rng
from zkintel.utils import (
    base36_to_int,
    base36_width,
    ensure_bn,
    hash_to_scalar,
    int_to_base36,
    make_generators,
)


logger = logging.getLogger(__name__)

# Random bits of the nonce tag, which fit in NONCE_PREFIX_LENGTH base-36 digits.
TAG_BITS = 20


class PedersenParams:
    """
    Public parameters: a group and two bases with unknown relative discrete logarithm.

    Args:
        group: Elliptic-curve group, :py:data:`consts.DEFAULT_GROUP` by default.
        labels: Two labels hashed to the curve to obtain :math:`G` and :math:`H`.
    """

    def __init__(self, group=None, labels=PEDERSEN_LABELS):
        if group is None:
            group = DEFAULT_GROUP
        if len(labels) != 2:
            raise ValueError("Need exactly two labels")
        self.group = group
        self.g, self.h = make_generators(labels, group)

    @property
    def order(self):
        return self.group.order()

    def commit(self, value, blinding):
        """Compute ``value * G + blinding * H``."""
        return ensure_bn(value) * self.g + ensure_bn(blinding) * self.h

    def dump(self, point):
        """Encode a point as lowercase hex."""
        return binascii.hexlify(point.export()).decode("ascii")

    def load(self, commitment):
        """
        Decode a hex commitment to a point of the group.

        >>> params = PedersenParams()
        >>> params.load(params.dump(params.g)) == params.g
        True

        Raises:
            MalformedCommitment: If the commitment is not the encoding of a group element.
        """
        try:
            data = binascii.unhexlify(commitment)
        except (ValueError, TypeError) as e:
            raise MalformedCommitment("Not hex: {!r}".format(commitment)) from e
        try:
            return EcPt.from_binary(data, self.group)
        except Exception as e:
            # petlib reports invalid encodings with a bare Exception.
            raise MalformedCommitment(
                "Not a group element: {!r}".format(commitment)
            ) from e


class PedersenScheme(CommitmentScheme):
    """
    Commitment scheme producing Pedersen commitments.

    Args:
        params (:py:class:`PedersenParams`): Public parameters.
        salt: Salt hashed together with the secret.
    """

    name = "pedersen"
    supports_knowledge = True

    def __init__(self, params=None, salt=SALT):
        if params is None:
            params = PedersenParams()
        self.params = params
        self.salt = salt
        self.scalar_width = base36_width(params.order.num_bits())
        self.nonce_width = NONCE_PREFIX_LENGTH + self.scalar_width

    def draw_nonce(self, rng=None):
        """
        Draw a blinding scalar and render it in base 36, after a random tag.

        Only the tag ends up in the proof token, so the token reveals nothing about the
        blinding scalar.
        """
        rng = get_rng(rng)
        tag = draw_nonce(rng, bits=TAG_BITS, width=NONCE_PREFIX_LENGTH)
        blinding = draw_scalar(self.params.order, rng)
        return tag + int_to_base36(blinding, width=self.scalar_width)

    def message_scalar(self, secret):
        """Hash the secret and the salt to a scalar."""
        with secret_material(secret, self.salt) as material:
            return hash_to_scalar(material, self.params.order)

    def blinding_scalar(self, nonce):
        """
        Recover the blinding scalar from a nonce.

        Raises:
            ValueError: If the nonce is not base 36 or out of range.
        """
        blinding = base36_to_int(nonce[NONCE_PREFIX_LENGTH:])
        if not 0 < blinding < int(self.params.order):
            raise ValueError("Nonce out of range")
        return ensure_bn(blinding)

    def commit(self, secret, nonce):
        point = self.params.commit(
            self.message_scalar(secret), self.blinding_scalar(nonce)
        )
        return self.params.dump(point)

    def open(self, secret, nonce, commitment):
        """
        Check that ``(secret, nonce)`` opens the commitment.
        """
        return self.commit(secret, nonce) == commitment

    def statement(self, commitment):
        """Proof statement for the commitment."""
        return OpeningStmt(self.params, self.params.load(commitment))

    def prove(self, secret, nonce, commitment, message=""):
        """
        Prove knowledge of the opening of ``commitment``.

        Args:
            message: Message the proof is bound to, normally the proof token.

        Returns:
            :py:class:`zkintel.base.KnowledgeProof`
        """
        stmt = self.statement(commitment)
        secret_values = [self.message_scalar(secret), self.blinding_scalar(nonce)]
        nizk = stmt.prove(secret_values, message=message)
        del secret_values[:]
        logger.debug("Built proof of knowledge for commitment %s", commitment)
        return nizk


register_scheme(PedersenScheme())
