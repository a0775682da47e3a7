"""
Commitment generator.

Commits to a secret threat indicator (a file hash, an IP address, ...) without revealing it:

>>> result = generate("a4b3c2d1e5f6")
>>> nonce, commitment = result
>>> len(nonce) >= 4
True
>>> result.proof.startswith("zkp_")
True
>>> generate("   ") is None
True

The commitment is computed by a :py:class:`CommitmentScheme`. The digest schemes hash
``secret || nonce || salt``; the Pedersen scheme (see :py:mod:`zkintel.pedersen`) commits on an
elliptic curve and additionally supports proofs of knowledge of the committed secret.
"""

import abc
import contextlib
import logging

import attr

from zkintel.consts import DEFAULT_SCHEME, SALT
from zkintel.digest import DIGESTS
from zkintel.exceptions import UnknownSchemeError, UnsupportedOperationError
from zkintel.nonce import draw_nonce
from zkintel.token import encode


logger = logging.getLogger(__name__)


@attr.s(frozen=True)
class GeneratedCommitment:
    """
    Output of :py:func:`generate`.

    Unpacks as ``(nonce, commitment)``. The nonce is kept out of the repr so that logging the
    object does not expose it.
    """

    nonce = attr.ib(repr=False)
    commitment = attr.ib()
    scheme = attr.ib(default=DEFAULT_SCHEME)
    knowledge = attr.ib(default=None, repr=False)

    def __iter__(self):
        return iter((self.nonce, self.commitment))

    @property
    def proof(self):
        """Proof token for this commitment."""
        return encode(self.commitment, self.nonce)


@contextlib.contextmanager
def secret_material(*parts):
    """
    Concatenate the UTF-8 encodings of ``parts`` into a buffer that is zeroed on exit.

    >>> with secret_material("ioc", "nonce") as material:
    ...     bytes(material)
    b'iocnonce'
    >>> bytes(material)
    b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x00'
    """
    material = bytearray()
    try:
        for part in parts:
            material.extend(part.encode("utf-8"))
        yield material
    finally:
        material[:] = bytes(len(material))


class CommitmentScheme(metaclass=abc.ABCMeta):
    """
    Abstract commitment scheme.

    A scheme draws nonces and turns a ``(secret, nonce)`` pair into a lowercase hex commitment.
    """

    name = None
    supports_knowledge = False

    def draw_nonce(self, rng=None):
        """Draw a fresh nonce."""
        return draw_nonce(rng)

    @abc.abstractmethod
    def commit(self, secret, nonce):
        """
        Compute the commitment to ``secret`` blinded by ``nonce``.

        Returns:
            str: Lowercase hex commitment.
        """
        pass

    def prove(self, secret, nonce, commitment, message=""):
        """
        Build a proof of knowledge of the committed secret. Override if supported.
        """
        raise UnsupportedOperationError(
            "Scheme {} does not support proofs of knowledge".format(self.name)
        )

    def __repr__(self):
        return "{}(name={!r})".format(self.__class__.__name__, self.name)


class DigestScheme(CommitmentScheme):
    """
    Commitment as a digest of ``secret || nonce || salt``.

    Args:
        name: Scheme name.
        digest: Function from bytes to a hex string, see :py:mod:`zkintel.digest`.
        salt: Salt appended to the material.
    """

    def __init__(self, name, digest, salt=SALT):
        self.name = name
        self.digest = digest
        self.salt = salt

    def commit(self, secret, nonce):
        with secret_material(secret, nonce, self.salt) as material:
            return self.digest(material)


_SCHEMES = {}


def register_scheme(scheme):
    """Make ``scheme`` available by its name."""
    _SCHEMES[scheme.name] = scheme
    return scheme


def get_scheme(scheme=None):
    """
    Resolve a scheme object from a name, an instance, or ``None`` for the default.

    >>> get_scheme("sha256")
    DigestScheme(name='sha256')
    """
    if scheme is None:
        scheme = DEFAULT_SCHEME
    if isinstance(scheme, CommitmentScheme):
        return scheme
    try:
        return _SCHEMES[scheme]
    except KeyError:
        raise UnknownSchemeError(scheme) from None


for _name, _digest in DIGESTS.items():
    register_scheme(DigestScheme(_name, _digest))


def generate(secret, scheme=None, rng=None, prove_knowledge=False):
    """
    Commit to a secret.

    Args:
        secret (str): The secret value. Refused if blank.
        scheme: :py:class:`CommitmentScheme` or the name of a registered scheme.
        rng: Randomness source used to draw the nonce, see :py:mod:`zkintel.nonce`.
        prove_knowledge (bool): Also build a proof of knowledge of the secret, bound to the
            proof token. Requires a scheme that supports it.

    Returns:
        :py:class:`GeneratedCommitment` or None: None if the secret is blank.
    """
    if secret is not None and not isinstance(secret, str):
        raise TypeError("Expected a string secret. Got: {}".format(type(secret)))
    if secret is None or not secret.strip():
        logger.debug("Refusing to commit to a blank secret")
        return None

    scheme = get_scheme(scheme)
    if prove_knowledge and not scheme.supports_knowledge:
        raise UnsupportedOperationError(
            "Scheme {} does not support proofs of knowledge".format(scheme.name)
        )

    nonce = scheme.draw_nonce(rng)
    commitment = scheme.commit(secret, nonce)

    knowledge = None
    if prove_knowledge:
        knowledge = scheme.prove(
            secret, nonce, commitment, message=encode(commitment, nonce)
        )

    logger.debug("Generated %s commitment %s", scheme.name, commitment)
    return GeneratedCommitment(
        nonce=nonce, commitment=commitment, scheme=scheme.name, knowledge=knowledge
    )
