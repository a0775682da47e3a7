"""
System-wide constants.
"""

from petlib.ec import EcGroup

# Fixed salt appended to every committed value.
SALT = "salt"

# Proof tokens look like ``zkp_<commitment>_<nonce prefix>``.
PROOF_PREFIX = "zkp_"
PROOF_SEPARATOR = "_"
NONCE_PREFIX_LENGTH = 4

# Nonces of the digest schemes: NONCE_BITS random bits, base-36, zero-padded.
NONCE_BITS = 56
NONCE_LENGTH = 11

DEFAULT_SCHEME = "sha256"

# Bit length of interactive challenges.
CHALLENGE_LENGTH = 128

DEFAULT_GROUP = EcGroup()

# Labels hashed to the curve to obtain the Pedersen bases.
PEDERSEN_LABELS = (b"zkintel.pedersen.g", b"zkintel.pedersen.h")

INDICATOR_TYPES = ("hash", "ip", "domain", "url")
SEVERITIES = ("low", "medium", "high", "critical")
DEFAULT_SEVERITY = "medium"
