import math
import secrets
import hashlib

from petlib.bn import Bn

from zkintel.consts import DEFAULT_GROUP


BASE36_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def int_to_base36(num, width=0):
    """
    Render a non-negative integer in base 36, left-padded with zeros.

    >>> int_to_base36(0)
    '0'
    >>> int_to_base36(35)
    'z'
    >>> int_to_base36(36, width=4)
    '0010'

    Args:
        num: Non-negative integer (``int`` or ``Bn``).
        width: Minimal length of the result.
    """
    num = int(num)
    if num < 0:
        raise ValueError("Cannot encode a negative number: {}".format(num))
    digits = []
    while num:
        num, rem = divmod(num, 36)
        digits.append(BASE36_ALPHABET[rem])
    encoded = "".join(reversed(digits)) or "0"
    return encoded.rjust(width, "0")


def base36_to_int(text):
    """
    Parse a base-36 string.

    >>> base36_to_int("0010")
    36
    >>> base36_to_int(int_to_base36(123456789))
    123456789
    """
    return int(text, 36)


def base36_width(bits):
    """
    Number of base-36 digits needed for any integer below ``2**bits``.

    >>> base36_width(56)
    11
    >>> base36_width(1)
    1
    """
    return max(1, math.ceil(bits / math.log2(36)))


def get_random_point(group=None, random_bits=256, label=None):
    """
    Hash a random (or labelled) string to a point of the group.

    >>> from petlib.ec import EcPt
    >>> isinstance(get_random_point(), EcPt)
    True
    >>> get_random_point(label=b"g") == get_random_point(label=b"g")
    True

    Args:
        group: Group, :py:data:`consts.DEFAULT_GROUP` by default.
        random_bits: Number of bits of a random string to create a point.
        label: Optional fixed label. Identical labels give identical points.
    """
    if group is None:
        group = DEFAULT_GROUP

    if label is None:
        randomness = secrets.token_bytes(math.ceil(random_bits / 8))
    else:
        randomness = hashlib.sha512(label).digest()

    return group.hash_to_point(randomness)


def make_generators(labels, group=None):
    """
    Derive one group generator per label.

    Nobody knows the discrete logarithm of one generator with respect to another.

    >>> g, h = make_generators([b"g", b"h"])
    >>> g != h
    True
    """
    if group is None:
        group = DEFAULT_GROUP
    return [get_random_point(group, label=label) for label in labels]


def get_random_num(bits):
    """
    Draw a random number of given bitlength.

    >>> x = get_random_num(6)
    >>> x < 2**6
    True
    """
    order = Bn(2).pow(bits)
    return order.random()


def ensure_bn(x):
    """
    Ensure that value is big number.

    >>> isinstance(ensure_bn(2**200), Bn)
    True
    >>> isinstance(ensure_bn(Bn(42)), Bn)
    True
    """
    if isinstance(x, Bn):
        return x
    else:
        return Bn.from_decimal(str(x))


def hash_to_scalar(data, order):
    """
    Map bytes to a scalar modulo the group order using SHA-256.

    >>> order = Bn(2).pow(255)
    >>> hash_to_scalar(b"ioc", order) == hash_to_scalar(b"ioc", order)
    True
    """
    return Bn.from_hex(hashlib.sha256(bytes(data)).hexdigest()) % order
