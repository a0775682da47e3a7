"""
Asynchronous workflows for the display layer.

Each workflow goes ``IDLE -> IN_PROGRESS -> SETTLED`` and does not accept a new run while one is
in progress. Blank inputs are refused before the workflow starts: the run returns None and the
state does not change. The actual work runs in the default executor so that the event loop
stays responsive.

>>> import asyncio
>>> async def roundtrip(secret):
...     generated = await GenerateWorkflow().run(secret)
...     return await VerifyWorkflow().run(generated.commitment, generated.proof)
>>> asyncio.run(roundtrip("malicious.example.org"))
VerificationResult(valid=True, reason=None)
"""

import asyncio
import enum
import functools
import logging

import attr

from zkintel.commitment import generate
from zkintel.consts import DEFAULT_SEVERITY, INDICATOR_TYPES, SEVERITIES
from zkintel.exceptions import (
    CommitmentMismatch,
    MalformedCommitment,
    MalformedProof,
    StatementMismatch,
    WorkflowBusyError,
)
from zkintel.verifier import verify


logger = logging.getLogger(__name__)


class WorkflowState(enum.Enum):
    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    SETTLED = "settled"


@attr.s(frozen=True)
class VerificationResult:
    """
    Validity of a proof, with the reason of a rejection.

    Reasons are ``"malformed"``, ``"mismatch"``, ``"malformed_commitment"``,
    ``"statement_mismatch"``, or ``"rejected"`` when the verifier simply returned False.
    """

    valid = attr.ib()
    reason = attr.ib(default=None)

    def __bool__(self):
        return bool(self.valid)


@attr.s(frozen=True)
class Submission:
    """A threat indicator submitted through a proof. Not persisted."""

    indicator_type = attr.ib()
    severity = attr.ib()
    commitment = attr.ib()
    proof = attr.ib()
    accepted = attr.ib()
    reason = attr.ib(default=None)
    tags = attr.ib(default=(), converter=tuple)
    description = attr.ib(default="")


def _is_blank(value):
    return value is None or not value.strip()


_REASONS = [
    (MalformedProof, "malformed"),
    (CommitmentMismatch, "mismatch"),
    (MalformedCommitment, "malformed_commitment"),
    (StatementMismatch, "statement_mismatch"),
]


def judge(commitment, proof, verifier=None, **kwargs):
    """
    Verify a pair and turn verification errors into a :py:class:`VerificationResult`.

    >>> judge("c0ffee", "zkp_deadbeef_abcd")
    VerificationResult(valid=False, reason='mismatch')
    >>> judge("c0ffee", "garbage")
    VerificationResult(valid=False, reason='malformed')
    """
    try:
        valid = verify(commitment, proof, verifier=verifier, **kwargs)
    except tuple(exc for exc, _ in _REASONS) as e:
        reason = next(name for exc, name in _REASONS if isinstance(e, exc))
        return VerificationResult(False, reason)
    if valid is None:
        return None
    return VerificationResult(bool(valid), None if valid else "rejected")


class _Workflow:
    """
    Single-flight state machine shared by the workflows.

    Args:
        delay (float): Seconds to wait before doing the work.
    """

    def __init__(self, delay=0.0):
        self.delay = delay
        self.state = WorkflowState.IDLE
        self.result = None

    @property
    def busy(self):
        return self.state is WorkflowState.IN_PROGRESS

    def reset(self):
        """Go back to idle, e.g., on new input."""
        if self.busy:
            raise WorkflowBusyError("Cannot reset a workflow in progress")
        self.state = WorkflowState.IDLE
        self.result = None

    async def _execute(self, func, *args, **kwargs):
        if self.busy:
            raise WorkflowBusyError(
                "{} is already in progress".format(self.__class__.__name__)
            )
        self.state = WorkflowState.IN_PROGRESS
        self.result = None
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            loop = asyncio.get_running_loop()
            self.result = await loop.run_in_executor(
                None, functools.partial(func, *args, **kwargs)
            )
        finally:
            self.state = WorkflowState.SETTLED
        logger.info("%s settled", self.__class__.__name__)
        return self.result


class GenerateWorkflow(_Workflow):
    """
    Generate a commitment and its proof token.

    Args:
        scheme: Commitment scheme or its name.
        rng: Randomness source.
        prove_knowledge (bool): Also build a proof of knowledge.
        delay (float): Seconds to wait before doing the work.
    """

    def __init__(self, scheme=None, rng=None, prove_knowledge=False, delay=0.0):
        super().__init__(delay)
        self.scheme = scheme
        self.rng = rng
        self.prove_knowledge = prove_knowledge

    async def run(self, secret):
        """
        Returns:
            :py:class:`zkintel.commitment.GeneratedCommitment` or None if the secret is blank.
        """
        if _is_blank(secret):
            logger.debug("Generate workflow refused a blank secret")
            return None
        return await self._execute(
            generate,
            secret,
            scheme=self.scheme,
            rng=self.rng,
            prove_knowledge=self.prove_knowledge,
        )


class VerifyWorkflow(_Workflow):
    """
    Verify a commitment and its proof token.

    Args:
        verifier: :py:class:`zkintel.verifier.ProofVerifier`, binding by default.
        delay (float): Seconds to wait before doing the work.
    """

    def __init__(self, verifier=None, delay=0.0):
        super().__init__(delay)
        self.verifier = verifier

    async def run(self, commitment, proof, **kwargs):
        """
        Returns:
            :py:class:`VerificationResult` or None if the commitment or the proof is blank.
        """
        if _is_blank(commitment) or _is_blank(proof):
            logger.debug("Verify workflow refused a blank input")
            return None
        return await self._execute(
            judge, commitment, proof, verifier=self.verifier, **kwargs
        )


class SubmissionWorkflow(VerifyWorkflow):
    """
    Accept a threat indicator submission only if its proof verifies.
    """

    async def submit(
        self,
        commitment,
        proof,
        indicator_type="hash",
        severity=DEFAULT_SEVERITY,
        tags=(),
        description="",
        **kwargs
    ):
        """
        Args:
            commitment: Commitment to the indicator.
            proof: Proof token.
            indicator_type: One of :py:data:`consts.INDICATOR_TYPES`.
            severity: One of :py:data:`consts.SEVERITIES`.
            tags: Free-form tags.
            description: Free-form description.
            kwargs: Extra arguments for the verifier, e.g., ``knowledge``.

        Returns:
            :py:class:`Submission` or None if the commitment or the proof is blank.
        """
        if indicator_type not in INDICATOR_TYPES:
            raise ValueError("Unknown indicator type: {}".format(indicator_type))
        if severity not in SEVERITIES:
            raise ValueError("Unknown severity: {}".format(severity))

        result = await self.run(commitment, proof, **kwargs)
        if result is None:
            return None

        submission = Submission(
            indicator_type=indicator_type,
            severity=severity,
            commitment=commitment.strip(),
            proof=proof.strip(),
            accepted=result.valid,
            reason=result.reason,
            tags=tags,
            description=description,
        )
        logger.info(
            "Submission of %s indicator %s",
            indicator_type,
            "accepted" if submission.accepted else "rejected",
        )
        return submission
