__version__ = "0.1.0"
__title__ = "zkintel"
__author__ = "zkintel contributors"
__license__ = "MIT"
__description__ = "Commitments and zero-knowledge proofs of possession for threat intelligence indicators."


from zkintel.token import ProofToken, encode, parse
from zkintel.commitment import GeneratedCommitment, generate
from zkintel.pedersen import PedersenParams, PedersenScheme
from zkintel.verifier import (
    BindingVerifier,
    FormatVerifier,
    KnowledgeVerifier,
    verify,
)
