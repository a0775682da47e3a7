"""
Utils that can be useful for debugging.
"""

import logging


logger = logging.getLogger(__name__)


class SigmaProtocol:
    """
    Sigma-protocol runner.

    Args:
        verifier: Verifier object
        prover: Prover object
    """

    def __init__(self, verifier, prover):
        self.verifier = verifier
        self.prover = prover

    def verify(self):
        """Run the interactive protocol and return the verifier's decision."""

        # Funky names.
        victor = self.verifier
        peggy = self.prover

        commitment = peggy.commit()
        challenge = victor.send_challenge(commitment)
        response = peggy.compute_response(challenge)
        result = victor.verify(response)

        logger.debug(
            "%s for %s", "Verified" if result else "Not verified", type(victor).__name__
        )
        return result
