"""
Star Registry - a hash-linked ledger of signed star ownership claims.
"""

from .blockchain import Block, Ledger
from .exceptions import (
    StarRegistryError,
    GenesisAccessError,
    ChainIntegrityError,
    ClaimSubmissionError,
    ProtocolError,
    ExpiredChallengeError,
    SignatureError,
)
from .wallet import WalletKeys, verify_message

__version__ = "0.1.0"

__all__ = [
    'Block',
    'Ledger',
    'WalletKeys',
    'verify_message',
    'StarRegistryError',
    'GenesisAccessError',
    'ChainIntegrityError',
    'ClaimSubmissionError',
    'ProtocolError',
    'ExpiredChallengeError',
    'SignatureError',
]
