"""
Interactive run of the sigma protocol behind the Pedersen proofs of knowledge.
"""

from zkintel.knowledge import OpeningStmt
from zkintel.pedersen import PedersenParams

params = PedersenParams()

# The committed scalars. In practice, derived from the indicator and the nonce.
m = params.order.random()
r = params.order.random()

stmt = OpeningStmt(params, params.commit(m, r))

# Simulate the prover and the verifier interacting.
prover = stmt.get_prover([m, r])
verifier = stmt.get_verifier()

commitment = prover.commit()
challenge = verifier.send_challenge(commitment)
response = prover.compute_response(challenge)
assert verifier.verify(response)
