"""
Bitcoin Signed Message Module

Verifies wallet signatures the way Electrum and Bitcoin Core produce them:

    digest    = SHA256d(varint(len(magic)) | magic | varint(len(msg)) | msg)
    signature = base64(header | r (32 bytes) | s (32 bytes))
    header    = 27 + recovery_id (+ 4 when the key is compressed)

The verifier never sees a public key. It recovers the signer's key from the
signature and digest, hashes it into a P2PKH address and compares that with
the claimed address.
"""

import base64
import binascii
import hashlib
from typing import List, Tuple, Union

import base58
from ecdsa import SECP256k1, VerifyingKey, numbertheory
from ecdsa.ecdsa import InvalidPointError
from ecdsa.util import sigdecode_string

from ..core_crypto.hashing import hash160, sha256d


# ============================================================================
# Constants
# ============================================================================

MESSAGE_MAGIC = b"Bitcoin Signed Message:\n"
SIGNATURE_SIZE = 65
HEADER_MIN = 27
HEADER_MAX = 34
COMPRESSED_FLAG = 4

MAINNET_P2PKH = 0x00
TESTNET_P2PKH = 0x6f
P2PKH_VERSIONS = (MAINNET_P2PKH, TESTNET_P2PKH)

CURVE_ORDER = SECP256k1.order


# ============================================================================
# Digest and Address Helpers
# ============================================================================

def _varint(n: int) -> bytes:
    """Bitcoin CompactSize encoding."""
    if n < 0xfd:
        return bytes([n])
    if n <= 0xffff:
        return b'\xfd' + n.to_bytes(2, 'little')
    if n <= 0xffffffff:
        return b'\xfe' + n.to_bytes(4, 'little')
    return b'\xff' + n.to_bytes(8, 'little')


def _as_bytes(message: Union[str, bytes]) -> bytes:
    if isinstance(message, str):
        return message.encode('utf-8')
    return message


def message_digest(message: Union[str, bytes]) -> bytes:
    """Compute the 32-byte digest a wallet signs for ``message``."""
    data = _as_bytes(message)
    return sha256d(
        _varint(len(MESSAGE_MAGIC)) + MESSAGE_MAGIC + _varint(len(data)) + data
    )


def pubkey_to_address(public_key: bytes, version: int = MAINNET_P2PKH) -> str:
    """Derive the base58check P2PKH address for a SEC-encoded public key."""
    payload = bytes([version]) + hash160(public_key)
    return base58.b58encode_check(payload).decode('ascii')


# ============================================================================
# Compact Signatures
# ============================================================================

def encode_signature(r: int, s: int, recovery_id: int,
                     compressed: bool = True) -> str:
    """Pack (r, s, recovery id) into the base64 compact signature format."""
    header = HEADER_MIN + recovery_id + (COMPRESSED_FLAG if compressed else 0)
    raw = bytes([header]) + r.to_bytes(32, 'big') + s.to_bytes(32, 'big')
    return base64.b64encode(raw).decode('ascii')


def decode_signature(signature: str) -> Tuple[int, int, int, bool]:
    """
    Unpack a base64 compact signature.

    Returns:
        Tuple of (r, s, recovery_id, compressed)

    Raises:
        ValueError: If the signature is malformed
    """
    try:
        raw = base64.b64decode(signature, validate=True)
    except binascii.Error as exc:
        raise ValueError("Signature is not valid base64") from exc

    if len(raw) != SIGNATURE_SIZE:
        raise ValueError(f"Signature must be {SIGNATURE_SIZE} bytes")

    header = raw[0]
    if not HEADER_MIN <= header <= HEADER_MAX:
        raise ValueError(f"Invalid signature header byte {header}")

    compressed = header >= HEADER_MIN + COMPRESSED_FLAG
    recovery_id = (header - HEADER_MIN) & 3
    r = int.from_bytes(raw[1:33], 'big')
    s = int.from_bytes(raw[33:], 'big')

    if not (0 < r < CURVE_ORDER and 0 < s < CURVE_ORDER):
        raise ValueError("Signature values out of range")

    return r, s, recovery_id, compressed


def recover_public_keys(digest: bytes, r: int, s: int) -> List[VerifyingKey]:
    """
    Recover the candidate signer keys for a digest and signature.

    The list is ordered by recovery id: index 0 is the key for an R point
    with even y, index 1 for odd y.
    """
    raw = r.to_bytes(32, 'big') + s.to_bytes(32, 'big')
    return VerifyingKey.from_public_key_recovery_with_digest(
        raw, digest, SECP256k1,
        hashfunc=hashlib.sha256,
        sigdecode=sigdecode_string,
    )


# ============================================================================
# Verification
# ============================================================================

def verify_message(message: Union[str, bytes], address: str,
                   signature: str) -> bool:
    """
    Check that ``signature`` over ``message`` was made by ``address``.

    Args:
        message: The signed text (the ownership challenge)
        address: Base58check P2PKH address of the claimed signer
        signature: Base64 compact signature

    Returns:
        True if the signature is valid for the address, False otherwise
    """
    if not isinstance(address, str) or not isinstance(signature, str):
        return False

    try:
        payload = base58.b58decode_check(address)
        r, s, recovery_id, compressed = decode_signature(signature)
    except ValueError:
        return False

    if len(payload) != 21 or payload[0] not in P2PKH_VERSIONS:
        return False
    # Recovery ids 2 and 3 need r >= n, which secp256k1 makes negligible
    if recovery_id > 1:
        return False

    try:
        candidates = recover_public_keys(message_digest(message), r, s)
    except (ValueError, numbertheory.Error, InvalidPointError):
        return False

    if recovery_id >= len(candidates):
        return False

    encoding = 'compressed' if compressed else 'uncompressed'
    public_key = candidates[recovery_id].to_string(encoding)
    return hash160(public_key) == payload[1:]
