"""
Verification of ``(commitment, proof)`` pairs.

Three verifiers are available:

* :py:class:`BindingVerifier` (the default) parses the proof token and requires the commitment
  it embeds to be exactly the supplied commitment.
* :py:class:`KnowledgeVerifier` additionally checks a proof of knowledge of the opening of a
  Pedersen commitment, bound to the proof token.
* :py:class:`FormatVerifier` only checks the ``zkp_`` prefix. It accepts any well-prefixed proof
  for any non-empty commitment, including unrelated ones, and is kept to judge proofs the way
  older clients did.

>>> verify("deadbeef", "zkp_deadbeef_abcd")
True
>>> verify("anything-nonempty", "zkp_deadbeef_abcd", verifier=FormatVerifier())
True
>>> verify("", "zkp_x_y") is None
True
"""

import abc
import logging

from zkintel.base import KnowledgeProof
from zkintel.consts import PROOF_PREFIX
from zkintel.exceptions import CommitmentMismatch, MalformedProof
from zkintel.knowledge import OpeningStmt
from zkintel.pedersen import PedersenParams
from zkintel.token import parse


logger = logging.getLogger(__name__)


class ProofVerifier(metaclass=abc.ABCMeta):
    """
    Abstract verifier of a commitment and its proof token.
    """

    @abc.abstractmethod
    def check(self, commitment, proof):
        """
        Judge a pair of non-blank, trimmed commitment and proof.

        Returns:
            bool: True if the pair is accepted.
        """
        pass


class FormatVerifier(ProofVerifier):
    """
    Accept any proof that starts with ``zkp_`` as long as the commitment is non-empty.

    .. WARNING ::

        The commitment embedded in the proof is not compared to the supplied commitment.
    """

    def check(self, commitment, proof):
        return proof.startswith(PROOF_PREFIX) and len(commitment) > 0


class BindingVerifier(ProofVerifier):
    """
    Require the commitment embedded in the proof to equal the supplied commitment.

    Raises:
        MalformedProof: If the proof is not a well-formed token.
        CommitmentMismatch: If the embedded commitment differs.
    """

    def check(self, commitment, proof):
        token = parse(proof)
        if token.commitment != commitment:
            raise CommitmentMismatch(
                "Proof is for commitment {}, not {}".format(token.commitment, commitment)
            )
        return True


class KnowledgeVerifier(BindingVerifier):
    """
    Check the binding of the token, then a proof of knowledge of the Pedersen opening.

    Args:
        params (:py:class:`zkintel.pedersen.PedersenParams`): Public parameters the commitment
            was made with.
    """

    def __init__(self, params=None):
        if params is None:
            params = PedersenParams()
        self.params = params

    def check(self, commitment, proof, knowledge=None):
        """
        Args:
            knowledge: :py:class:`zkintel.base.KnowledgeProof`, or its serialized bytes.

        Raises:
            MalformedProof: If the proof of knowledge is missing or cannot be decoded.
            MalformedCommitment: If the commitment is not a group element.
            StatementMismatch: If the proof of knowledge was made for another statement.
        """
        super().check(commitment, proof)
        stmt = OpeningStmt(self.params, self.params.load(commitment))

        if isinstance(knowledge, (bytes, bytearray)):
            knowledge = KnowledgeProof.deserialize(knowledge)
        if not isinstance(knowledge, KnowledgeProof):
            raise MalformedProof("Missing proof of knowledge of the opening")
        return stmt.verify(knowledge, message=proof)


def _is_blank(value):
    return value is None or not value.strip()


def verify(commitment, proof, verifier=None, **kwargs):
    """
    Judge a commitment and its proof.

    Args:
        commitment (str): The commitment.
        proof (str): The proof token.
        verifier (:py:class:`ProofVerifier`): Defaults to :py:class:`BindingVerifier`.
        kwargs: Extra arguments for the verifier, e.g., ``knowledge``.

    Returns:
        bool or None: None if the commitment or the proof is blank, else the judgment of the
            verifier. Errors raised by the verifier are propagated.
    """
    if _is_blank(commitment) or _is_blank(proof):
        logger.debug("Refusing to verify a blank commitment or proof")
        return None
    if verifier is None:
        verifier = BindingVerifier()

    result = verifier.check(commitment.strip(), proof.strip(), **kwargs)
    logger.debug(
        "%s judged commitment %s: %s",
        verifier.__class__.__name__,
        commitment.strip(),
        result,
    )
    return result
