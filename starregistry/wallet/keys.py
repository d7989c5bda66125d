"""
Wallet Keys Module

A minimal secp256k1 wallet able to sign ownership challenges in the
Bitcoin signed-message format. Production claimants sign with their own
wallet software; this one backs the demo and the test suite.
"""

from dataclasses import dataclass
from typing import Optional, Union

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, utils

from .message import (
    CURVE_ORDER, MAINNET_P2PKH, TESTNET_P2PKH,
    encode_signature, message_digest, pubkey_to_address, recover_public_keys,
)


CURVE = ec.SECP256K1()


@dataclass
class WalletKeys:
    """secp256k1 key pair container."""
    private_key: Optional[ec.EllipticCurvePrivateKey]
    public_key: ec.EllipticCurvePublicKey

    @classmethod
    def generate(cls) -> 'WalletKeys':
        """Generate a new secp256k1 key pair."""
        private_key = ec.generate_private_key(CURVE)
        return cls(private_key, private_key.public_key())

    @classmethod
    def from_secret(cls, secret: int) -> 'WalletKeys':
        """Rebuild a key pair from a private scalar."""
        private_key = ec.derive_private_key(secret, CURVE)
        return cls(private_key, private_key.public_key())

    def public_bytes(self, compressed: bool = True) -> bytes:
        """Get public key as SEC bytes (33 compressed or 65 uncompressed)."""
        point_format = (
            serialization.PublicFormat.CompressedPoint if compressed
            else serialization.PublicFormat.UncompressedPoint
        )
        return self.public_key.public_bytes(
            encoding=serialization.Encoding.X962,
            format=point_format,
        )

    def address(self, testnet: bool = False, compressed: bool = True) -> str:
        """P2PKH address for this key."""
        version = TESTNET_P2PKH if testnet else MAINNET_P2PKH
        return pubkey_to_address(self.public_bytes(compressed), version)

    def sign_message(self, message: Union[str, bytes],
                     compressed: bool = True) -> str:
        """
        Sign a message in the Bitcoin signed-message format.

        Args:
            message: Text to sign (e.g. an ownership challenge)
            compressed: Whether the address uses the compressed key

        Returns:
            Base64 compact signature
        """
        if self.private_key is None:
            raise ValueError("Private key required for signing")

        digest = message_digest(message)
        der = self.private_key.sign(digest, ec.ECDSA(utils.Prehashed(hashes.SHA256())))
        r, s = utils.decode_dss_signature(der)

        # Low-S form, as wallets emit it
        if s > CURVE_ORDER // 2:
            s = CURVE_ORDER - s

        encoding = 'compressed' if compressed else 'uncompressed'
        expected = self.public_bytes(compressed)
        for recovery_id, candidate in enumerate(recover_public_keys(digest, r, s)):
            if candidate.to_string(encoding) == expected:
                return encode_signature(r, s, recovery_id, compressed)

        raise RuntimeError("Could not determine signature recovery id")
