r"""
ZK proof of knowledge of the opening of a Pedersen commitment.

The statement is :math:`PK\{ (m, r): C = m G + r H \}`, where :math:`C` is the commitment,
:math:`m` the scalar derived from the secret indicator, :math:`r` the blinding scalar encoded in
the nonce, and :math:`G`, :math:`H` the bases of :py:class:`zkintel.pedersen.PedersenParams`.

This is the Schnorr-style sigma protocol of Camenisch and Stadler for discrete-logarithm
representations, made non-interactive with the Fiat-Shamir heuristic. The proof token is used
as the Fiat-Shamir message, so a proof only verifies for the token it was made for.

>>> from zkintel.pedersen import PedersenParams
>>> params = PedersenParams()
>>> m, r = params.order.random(), params.order.random()
>>> stmt = OpeningStmt(params, params.commit(m, r))
>>> nizk = stmt.prove([m, r], message="zkp_00_0000")
>>> stmt.verify(nizk, message="zkp_00_0000")
True
>>> stmt.verify(nizk, message="zkp_11_1111")
False
"""

from hashlib import sha256

from petlib.pack import encode

from zkintel.base import Prover, Verifier, SimulationTranscript
from zkintel.consts import CHALLENGE_LENGTH
from zkintel.exceptions import StatementMismatch
from zkintel.utils import ensure_bn, get_random_num


class OpeningStmt:
    """
    Proof statement for the knowledge of a Pedersen opening.

    Args:
        params (:py:class:`zkintel.pedersen.PedersenParams`): Commitment parameters.
        lhs: "Left-hand side." The commitment :math:`C` as a group element.
    """

    def __init__(self, params, lhs):
        self.group = params.group
        self.bases = [params.g, params.h]
        self.lhs = lhs

    def get_bases(self):
        return self.bases

    def get_proof_id(self):
        """
        Identifier for the proof statement.

        Returns:
            list: Objects that can be used for hashing.
        """
        return [self.__class__.__name__, self.bases, self.lhs]

    def prehash_statement(self):
        """
        Return a hash of the proof's ID.
        """
        return sha256(encode(str(self.get_proof_id())))

    def check_statement(self, statement_hash):
        """
        Verify the current proof corresponds to the hash passed as a parameter.

        Returns a pre-hash of the current proof, e.g., to be used to verify NIZK proofs.
        """
        h = self.prehash_statement()
        if statement_hash != h.digest():
            raise StatementMismatch("Proof statements mismatch, impossible to verify")
        return h

    def get_prover(self, secret_values):
        """
        Get a prover for the current proof statement.

        Args:
            secret_values: The scalars :math:`(m, r)`.
        """
        if len(secret_values) != len(self.bases):
            raise ValueError(
                "Expected {} secret values, got {}".format(
                    len(self.bases), len(secret_values)
                )
            )
        return OpeningProver(self, [ensure_bn(x) for x in secret_values])

    def get_verifier(self):
        return OpeningVerifier(self)

    def get_randomizers(self):
        """
        Draw one randomizer per secret, uniformly from the group order.
        """
        order = self.group.order()
        return [order.random() for _ in self.bases]

    def recompute_commitment(self, challenge, responses):
        """
        Compute the commitment a verifier should have received if the proof was correct.
        """
        return self.group.wsum(list(responses), self.bases) + (-challenge) * self.lhs

    def prove(self, secret_values, message=""):
        """
        Generate the transcript of a non-interactive proof.
        """
        return self.get_prover(secret_values).get_nizk_proof(message)

    def verify(self, nizk, message=""):
        """
        Verify a non-interactive proof.
        """
        return self.get_verifier().verify_nizk(nizk, message)

    def simulate(self, challenge=None):
        """
        Simulate a transcript without knowing the secrets.

        Responses are drawn at random and the commitment is recomputed from them, which is why
        simulated transcripts satisfy the verification equation.
        """
        if challenge is None:
            challenge = get_random_num(CHALLENGE_LENGTH)
        responses = self.get_randomizers()
        return SimulationTranscript(
            commitment=self.recompute_commitment(challenge, responses),
            challenge=challenge,
            responses=responses,
            stmt_hash=self.prehash_statement().digest(),
        )

    def verify_simulation_consistency(self, transcript):
        """Check if the fields of a transcript satisfy the verification equation.

        .. WARNING::

            This is NOT an alternative to the full proof verification, as this function
            accepts simulated proofs.
        """
        verifier = self.get_verifier()
        self.check_statement(transcript.stmt_hash)
        verifier.commitment, verifier.challenge = (
            transcript.commitment,
            transcript.challenge,
        )
        return verifier.verify(transcript.responses)

    def __repr__(self):
        return str(self.get_proof_id())


class OpeningProver(Prover):
    """The prover of a Pedersen opening."""

    def internal_commit(self, randomizers=None):
        """
        Compute the commitment :math:`k_m G + k_r H` using the randomizers.

        Args:
            randomizers: Optional list of random values. Drawn at random if not given.
        """
        if randomizers is None:
            randomizers = self.stmt.get_randomizers()
        self.ks = [ensure_bn(k) for k in randomizers]
        return self.stmt.group.wsum(self.ks, self.stmt.bases)

    def compute_response(self, challenge):
        """
        For each secret :math:`x` and its randomizer :math:`k`, the response is
        :math:`k + c x`, where :math:`c` is the challenge value.
        """
        order = self.stmt.group.order()
        return [
            (x * challenge + k) % order for x, k in zip(self.secret_values, self.ks)
        ]


class OpeningVerifier(Verifier):
    """The verifier of a Pedersen opening."""
