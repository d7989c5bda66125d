# Blockchain Module
"""
Star registry ledger including:
- Immutable, hash-sealed blocks (frozen dataclass)
- SHA-256 chaining with full chain validation
- Signed, time-bounded star ownership claims
"""

from .block import Block, encode_payload, GENESIS_HEIGHT
from .ledger import Ledger, CHALLENGE_TAG, CHALLENGE_WINDOW_MINUTES, GENESIS_DATA

__all__ = [
    'Block',
    'Ledger',
    'encode_payload',
    'CHALLENGE_TAG',
    'CHALLENGE_WINDOW_MINUTES',
    'GENESIS_DATA',
    'GENESIS_HEIGHT',
]
