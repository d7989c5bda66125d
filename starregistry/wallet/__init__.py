# Wallet Module
"""
Bitcoin signed-message support:
- Signature verification by public key recovery
- secp256k1 wallet keys and P2PKH addresses
"""

from .message import (
    message_digest,
    pubkey_to_address,
    verify_message,
)
from .keys import WalletKeys

__all__ = [
    'WalletKeys',
    'message_digest',
    'pubkey_to_address',
    'verify_message',
]
