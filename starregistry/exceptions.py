"""
exceptions.py - Error hierarchy for the star registry ledger.
"""


class StarRegistryError(Exception):
    """Base exception for ledger and claim errors."""
    pass


class GenesisAccessError(StarRegistryError):
    """Raised when the genesis block payload is requested."""
    pass


class ChainIntegrityError(StarRegistryError):
    """Raised when an append would leave the chain inconsistent."""

    def __init__(self, errors, message="Blockchain validation failed"):
        super().__init__(f"{message}: offending blocks {list(errors)}")
        self.errors = list(errors)


class ClaimSubmissionError(StarRegistryError):
    """Raised when a star claim cannot be admitted to the chain."""
    pass


class ProtocolError(ClaimSubmissionError):
    """Raised for a challenge string that cannot be parsed."""
    pass


class ExpiredChallengeError(ClaimSubmissionError):
    """Raised when the challenge was issued outside the allowed window."""
    pass


class SignatureError(ClaimSubmissionError):
    """Raised when the signature does not match the address and challenge."""
    pass
