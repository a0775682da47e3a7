"""
Common classes, including subclassable basic provers and verifiers.
"""

import abc

import attr
from petlib.bn import Bn
from petlib.pack import encode, decode

from zkintel.consts import CHALLENGE_LENGTH
from zkintel.exceptions import MalformedProof
from zkintel.utils import get_random_num


@attr.s
class KnowledgeProof:
    """
    Non-interactive zero-knowledge proof.
    """

    challenge = attr.ib()
    responses = attr.ib()
    stmt_hash = attr.ib(default=None)

    def serialize(self):
        """Pack the proof into bytes."""
        return encode([self.challenge, list(self.responses), self.stmt_hash])

    @classmethod
    def deserialize(cls, data):
        """
        Unpack a proof produced by :py:meth:`serialize`.

        Raises:
            MalformedProof: If the bytes do not encode a proof.
        """
        try:
            structure = decode(bytes(data))
        except Exception as e:
            # petlib and its msgpack ext hooks signal bad input with plain Exception.
            raise MalformedProof("Cannot decode proof of knowledge") from e

        if not isinstance(structure, list) or len(structure) != 3:
            raise MalformedProof("Unexpected proof of knowledge layout")
        challenge, responses, stmt_hash = structure
        if (
            not isinstance(challenge, Bn)
            or not isinstance(responses, list)
            or not all(isinstance(resp, Bn) for resp in responses)
            or not isinstance(stmt_hash, bytes)
        ):
            raise MalformedProof("Unexpected proof of knowledge field types")
        return cls(challenge=challenge, responses=responses, stmt_hash=stmt_hash)


@attr.s
class SimulationTranscript:
    """
    Simulated proof transcript.
    """

    commitment = attr.ib()
    challenge = attr.ib()
    responses = attr.ib()
    stmt_hash = attr.ib(default=None)


def build_fiat_shamir_challenge(stmt_prehash, *args, message=""):
    """Generate a Fiat-Shamir challenge.

    >>> from hashlib import sha256
    >>> from petlib.ec import EcGroup
    >>> prehash = sha256(b"statement id")
    >>> commitment = 42 * EcGroup().generator()
    >>> isinstance(build_fiat_shamir_challenge(prehash, commitment), Bn)
    True

    Args:
        prehash: Hash object seeded with the proof statement ID.
        args: Items to hash (e.g., commitments)
        message: Message to bind the proof to, e.g., a proof token.
    """
    for elem in args:
        if not isinstance(elem, bytes) and not isinstance(elem, str):
            encoded = encode(elem)
        elif isinstance(elem, str):
            encoded = elem.encode()
        else:
            encoded = elem
        stmt_prehash.update(encoded)

    stmt_prehash.update(message.encode())
    return Bn.from_hex(stmt_prehash.hexdigest())


class Prover(metaclass=abc.ABCMeta):
    """
    Abstract interface representing Prover used in sigma protocols.

    Args:
        stmt: The proof statement from which we draw the Prover.
        secret_values: The values of the secrets, ordered as the statement's bases.
    """

    def __init__(self, stmt, secret_values):
        self.stmt = stmt
        self.secret_values = secret_values

    @abc.abstractmethod
    def internal_commit(self, randomizers=None):
        """
        Compute the commitment of the sigma protocol from fresh or given randomizers.
        """
        pass

    @abc.abstractmethod
    def compute_response(self, challenge):
        """
        Computes the responses associated to each secret in the statement.

        Returns a list of responses.
        """
        pass

    def commit(self, randomizers=None):
        """
        Construct the proof commitment.

        Args:
            randomizers: Optional list of random values, one for each secret.
        """
        return (
            self.stmt.prehash_statement().digest(),
            self.internal_commit(randomizers),
        )

    def get_nizk_proof(self, message=""):
        """
        Construct a non-interactive proof transcript using Fiat-Shamir heuristic.

        The transcript contains only the challenge and the responses, as the commitment can be
        deterministically recomputed.

        Args:
            message (str): Optional message the proof is bound to.
        """
        commitment = self.internal_commit()

        prehash = self.stmt.prehash_statement()
        stmt_hash = prehash.digest()
        challenge = build_fiat_shamir_challenge(prehash, commitment, message=message)

        responses = self.compute_response(challenge)
        return KnowledgeProof(
            challenge=challenge, responses=responses, stmt_hash=stmt_hash
        )


class Verifier(metaclass=abc.ABCMeta):
    """
    An abstract interface representing Verifier used in sigma protocols
    """

    def __init__(self, stmt):
        self.stmt = stmt

    def check_responses(self, responses):
        """
        Tell if the responses have the shape the statement expects.
        """
        return len(responses) == len(self.stmt.get_bases())

    def send_challenge(self, commitment):
        """
        Store the received commitment and generate a challenge.

        The challenge is chosen at random between 0 and ``2 ** CHALLENGE_LENGTH`` (excluded).

        Args:
            commitment: A tuple containing a hash of the statement, to be compared against the
                local statement, and the commitment as a group element.
        """
        statement, self.commitment = commitment
        self.stmt.check_statement(statement)
        self.challenge = get_random_num(bits=CHALLENGE_LENGTH)
        return self.challenge

    def verify(self, responses):
        """
        Verify the responses of an interactive sigma protocol.

        To do so, generates a pseudo-commitment based on the stored challenge and the received
        responses, and compares it against the stored commitment.

        Returns:
            bool: True if verification succeeded, False otherwise.
        """
        if not self.check_responses(responses):
            return False
        return self.commitment == self.stmt.recompute_commitment(
            self.challenge, responses
        )

    def verify_nizk(self, nizk, message=""):
        """
        Verify a non-interactive proof.

        Recomputes the commitment from the challenge and the responses, derives the
        pseudo-challenge from it and compares it with the challenge of the proof.

        Args:
            nizk (:py:class:`KnowledgeProof`): Non-interactive proof
            message: The message the proof is bound to.

        Raises:
            StatementMismatch: If the proof was made for another statement.

        Return:
            bool: True of verification succeeded, False otherwise.
        """
        prehash = self.stmt.check_statement(nizk.stmt_hash)
        if not self.check_responses(nizk.responses):
            return False

        commitment_prime = self.stmt.recompute_commitment(
            nizk.challenge, nizk.responses
        )
        challenge_prime = build_fiat_shamir_challenge(
            prehash, commitment_prime, message=message
        )
        return nizk.challenge == challenge_prime
