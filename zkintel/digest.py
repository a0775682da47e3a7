"""
Digest functions mapping committed material to lowercase hex strings.

Every digest takes the UTF-8 encoded material (``bytes`` or ``bytearray``) and returns a hex
string, so that one can be swapped for another without touching callers.
"""

import hashlib
import warnings

from zkintel.exceptions import InsecureDigestWarning


def _to_int32(value):
    """
    Wrap an integer to a signed 32-bit integer.

    >>> _to_int32(2**31)
    -2147483648
    >>> _to_int32(-1)
    -1
    """
    value &= 0xFFFFFFFF
    if value & 0x80000000:
        value -= 0x100000000
    return value


def rolling_digest(material):
    """
    Legacy 32-bit rolling digest.

    Computes ``acc = acc * 32 - acc + ord(char)`` over the characters of the material, wrapping
    to a signed 32-bit integer at every step, and renders the absolute value in hex.

    .. WARNING ::

        Not collision resistant. Kept only to reproduce commitments made by older clients.

    >>> rolling_digest(b"a")
    '61'
    >>> rolling_digest(b"ab")
    'c21'
    """
    warnings.warn(
        "The rolling digest is not cryptographically secure", InsecureDigestWarning
    )
    acc = 0
    for char in bytes(material).decode("utf-8"):
        acc = _to_int32((acc << 5) - acc + ord(char))
    return "%x" % abs(acc)


def sha256_digest(material):
    """
    SHA-256 digest of the material.

    >>> len(sha256_digest(b"a4b3c2d1e5f6"))
    64
    """
    return hashlib.sha256(bytes(material)).hexdigest()


DIGESTS = {
    "rolling": rolling_digest,
    "sha256": sha256_digest,
}
