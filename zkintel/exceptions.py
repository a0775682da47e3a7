"""
Common exception classes.
"""


class MalformedProof(ValueError):
    """Proof token does not have the ``zkp_<commitment>_<prefix>`` shape."""


class CommitmentMismatch(Exception):
    """Commitment embedded in the proof differs from the supplied commitment."""


class MalformedCommitment(ValueError):
    """Commitment cannot be decoded to a group element."""


class StatementMismatch(Exception):
    """Proof statements mismatch, impossible to verify."""


class UnknownSchemeError(KeyError):
    """No commitment scheme is registered under this name."""


class UnsupportedOperationError(Exception):
    """The commitment scheme does not support the requested operation."""


class WorkflowBusyError(Exception):
    """A workflow was started again while still in progress."""


class InsecureDigestWarning(UserWarning):
    """A non-cryptographic digest was used to build a commitment."""
