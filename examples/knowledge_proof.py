"""
Proof of knowledge of the indicator behind a Pedersen commitment:
PK{ (m, r): C = m * G + r * H }

The proof is bound to the proof token and travels as bytes.
"""

from zkintel import generate, verify, KnowledgeVerifier

result = generate("https://evil.example/payload.exe", scheme="pedersen", prove_knowledge=True)

# What the prover sends.
commitment = result.commitment
proof = result.proof
knowledge = result.knowledge.serialize()

# What the verifier does.
verifier = KnowledgeVerifier()
assert verify(commitment, proof, verifier=verifier, knowledge=knowledge)
