"""
Nonce drawing.

The randomness source is a capability handed to the functions below: any object with the
``getrandbits`` and ``randrange`` methods of :py:class:`random.Random`. The process-wide default
is a :py:class:`random.SystemRandom`, which keeps no state between calls.
"""

import random

from zkintel.consts import NONCE_BITS, NONCE_LENGTH, NONCE_PREFIX_LENGTH
from zkintel.utils import int_to_base36


system_random = random.SystemRandom()


def get_rng(rng=None):
    """Return the given randomness source, or the system one."""
    if rng is None:
        return system_random
    return rng


def draw_nonce(rng=None, bits=NONCE_BITS, width=NONCE_LENGTH):
    """
    Draw a fresh base-36 nonce.

    >>> rng = random.Random(1)
    >>> nonce = draw_nonce(rng)
    >>> len(nonce)
    11
    >>> nonce == draw_nonce(random.Random(1))
    True

    Args:
        rng: Randomness source.
        bits: Number of random bits.
        width: Length of the nonce, at least :py:data:`consts.NONCE_PREFIX_LENGTH`.
    """
    if width < NONCE_PREFIX_LENGTH:
        raise ValueError(
            "Nonces must have at least {} characters".format(NONCE_PREFIX_LENGTH)
        )
    return int_to_base36(get_rng(rng).getrandbits(bits), width=width)


def draw_scalar(order, rng=None):
    """
    Draw a scalar uniformly in ``[1, order)``.

    >>> 1 <= draw_scalar(1000, random.Random(3)) < 1000
    True
    """
    return get_rng(rng).randrange(1, int(order))
