"""
Commit to a threat indicator and check the proof token:
secret -> (nonce, commitment) -> proof -> verify(commitment, proof)
"""

from zkintel import generate, encode, verify
from zkintel.exceptions import CommitmentMismatch

# A file hash the prover does not want to disclose.
secret = "a4b3c2d1e5f6a7b8c9d0e1f2a3b4c5d6"

nonce, commitment = generate(secret)
proof = encode(commitment, nonce)
assert proof.startswith("zkp_")

# Only the commitment and the proof leave the prover.
assert verify(commitment, proof)

# A proof made for one commitment does not verify another one.
other = generate("another indicator")
try:
    verify(other.commitment, proof)
except CommitmentMismatch:
    pass
else:
    raise AssertionError("Mismatched commitment was accepted")
