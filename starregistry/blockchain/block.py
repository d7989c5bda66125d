"""
Block Module

A block is one sealed ledger entry:
- height, timestamp and back-link to the previous block's hash
- an opaque payload (hex of compact JSON)
- the owner address, duplicated outside the payload for fast filtering
- a SHA-256 self-hash over the canonical form

Canonical form (hash input), compact JSON with this exact key order:

    {"height":..,"timestamp":..,"previous_hash":..,"owner":..,"body":..}

The ``hash`` field is never part of the canonical form, so a block can be
re-verified without being modified.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core_crypto.hashing import sha256_hex
from ..exceptions import GenesisAccessError


# ============================================================================
# Constants
# ============================================================================

GENESIS_HEIGHT = 0
CANONICAL_FIELDS = ('height', 'timestamp', 'previous_hash', 'owner', 'body')


# ============================================================================
# Payload Encoding
# ============================================================================

def encode_payload(data: Any) -> str:
    """Encode a JSON-serializable value as hex of its UTF-8 JSON text."""
    text = json.dumps(data, separators=(',', ':'), ensure_ascii=False)
    return text.encode('utf-8').hex()


def decode_body(body: str) -> str:
    """Reverse ``encode_payload`` back to the JSON text."""
    return bytes.fromhex(body).decode('utf-8')


# ============================================================================
# Block Structure (Immutable)
# ============================================================================

@dataclass(frozen=True)
class Block:
    """
    Immutable ledger entry.

    Callers build unsealed blocks with ``Block.create``; the ledger stamps
    ``height``, ``timestamp``, ``previous_hash`` and ``hash`` when it
    appends, producing a new sealed instance.
    """
    body: str
    owner: Optional[str] = None
    height: int = 0
    timestamp: int = 0
    previous_hash: Optional[str] = None
    hash: Optional[str] = None

    @classmethod
    def create(cls, data: Any, owner: Optional[str] = None) -> 'Block':
        """Build an unsealed block carrying ``data`` as its payload."""
        return cls(body=encode_payload(data), owner=owner)

    @property
    def is_genesis(self) -> bool:
        return self.height == GENESIS_HEIGHT

    @property
    def is_sealed(self) -> bool:
        return self.hash is not None

    def canonical_bytes(self) -> bytes:
        """Serialize every field except ``hash`` in the fixed field order."""
        record = {name: getattr(self, name) for name in CANONICAL_FIELDS}
        return json.dumps(record, separators=(',', ':')).encode('utf-8')

    def compute_hash(self) -> str:
        """SHA-256 of the canonical form, as lowercase hex."""
        return sha256_hex(self.canonical_bytes())

    def validate(self) -> bool:
        """True iff the stored hash matches a fresh recomputation."""
        return self.hash is not None and self.compute_hash() == self.hash

    def decode_payload(self) -> str:
        """
        Decode the payload back to its original text.

        Raises:
            GenesisAccessError: For the genesis block, whose payload is
                not available to callers.
        """
        if self.is_genesis:
            raise GenesisAccessError("Can not return data for Genesis Block")
        return decode_body(self.body)

    def decode_data(self) -> Any:
        """Decode the payload and parse it as JSON."""
        return json.loads(self.decode_payload())

    def check_payload(self) -> None:
        """
        Ensure ``body`` is hex of UTF-8 JSON text.

        Raises:
            ValueError: If the body cannot be decoded back to JSON
        """
        try:
            json.loads(decode_body(self.body))
        except (TypeError, ValueError) as exc:
            raise ValueError("Block payload must be hex-encoded JSON") from exc

    def to_dict(self) -> Dict[str, Any]:
        """Convert block to dictionary for display or transport."""
        record = {name: getattr(self, name) for name in CANONICAL_FIELDS}
        record['hash'] = self.hash
        return record

    def __str__(self) -> str:
        prev = self.previous_hash[:16] + '...' if self.previous_hash else '-'
        digest = self.hash[:16] + '...' if self.hash else '(unsealed)'
        return (
            f"Block #{self.height}\n"
            f"  Hash: {digest}\n"
            f"  Prev: {prev}\n"
            f"  Time: {self.timestamp}\n"
            f"  Owner: {self.owner or '-'}"
        )
