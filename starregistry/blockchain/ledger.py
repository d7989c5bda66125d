"""
Star Registry Ledger Module

Implements an append-only, hash-linked chain of star ownership claims:
- Genesis block created on construction
- SHA-256 linkage between consecutive blocks
- Atomic appends: the candidate chain is validated before commit
- Challenge/response claim protocol gated by wallet signatures

Concurrency:
- Every mutation runs under one asyncio.Lock (single writer)
- Commit is a single list append, readers work on tuple snapshots
"""

import asyncio
import time
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional, Sequence

from .block import Block, GENESIS_HEIGHT
from ..exceptions import (
    ChainIntegrityError,
    ClaimSubmissionError,
    ExpiredChallengeError,
    ProtocolError,
    SignatureError,
)
from ..log import get_logger
from ..wallet.message import verify_message


logger = get_logger(__name__)


# ============================================================================
# Constants
# ============================================================================

GENESIS_DATA = {'star': 'Genesis Block', 'owner': None}
CHALLENGE_TAG = 'starRegistry'
CHALLENGE_WINDOW_MINUTES = 5


# ============================================================================
# Ledger
# ============================================================================

class Ledger:
    """
    In-memory star registry blockchain.

    One instance is owned by the application and handed to whatever needs
    it; nothing here is a process-wide singleton.

    Example:
        ledger = Ledger()
        challenge = await ledger.request_ownership_challenge(address)
        signature = wallet.sign_message(challenge)
        block = await ledger.submit_star_claim(address, challenge, signature, star)
    """

    def __init__(self,
                 clock: Callable[[], float] = time.time,
                 challenge_window_minutes: float = CHALLENGE_WINDOW_MINUTES):
        """
        Initialize a new ledger with its genesis block.

        Args:
            clock: Returns the current Unix time in seconds
            challenge_window_minutes: Maximum age of an ownership challenge
        """
        self._chain: List[Block] = []
        self._clock = clock
        self._challenge_window = challenge_window_minutes
        self._write_lock = asyncio.Lock()

        self.initialize()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def height(self) -> int:
        """Height of the tail block, -1 when the chain is empty."""
        return len(self._chain) - 1

    @property
    def chain(self) -> Sequence[Block]:
        """Snapshot of the chain."""
        return tuple(self._chain)

    def _now(self) -> int:
        return int(self._clock())

    def initialize(self) -> None:
        """Create the genesis block if the chain is still empty."""
        if self.height == -1:
            genesis = self._append(Block.create(GENESIS_DATA))
            logger.info("Genesis block created: %s", genesis.hash)

    # ------------------------------------------------------------------
    # Append
    # ------------------------------------------------------------------

    def _append(self, block: Block) -> Block:
        """
        Seal ``block`` onto the tail and commit it if the chain stays valid.

        Raises:
            TypeError: If ``block`` is not a Block
            ValueError: If the payload is not hex-encoded JSON
            ChainIntegrityError: If the candidate chain fails validation;
                the chain is left unchanged
        """
        if not isinstance(block, Block):
            raise TypeError("Can add only objects of type Block")
        block.check_payload()

        tail = self._chain[-1] if self._chain else None
        candidate = replace(
            block,
            height=len(self._chain),
            timestamp=self._now(),
            previous_hash=tail.hash if tail else None,
            hash=None,
        )
        candidate = replace(candidate, hash=candidate.compute_hash())

        errors = self._find_errors(self._chain + [candidate])
        if errors:
            logger.warning(
                "Rejected block #%d, chain errors at %s", candidate.height, errors
            )
            raise ChainIntegrityError(errors)

        self._chain.append(candidate)
        return candidate

    async def append_block(self, block: Block) -> Block:
        """
        Append a block to the chain.

        The ledger assigns height, timestamp, previous hash and hash; any
        values the caller set on those fields are replaced.

        Returns:
            The sealed block as stored in the chain
        """
        async with self._write_lock:
            sealed = self._append(block)
        logger.info("Appended block #%d %s", sealed.height, sealed.hash)
        return sealed

    # ------------------------------------------------------------------
    # Star claims
    # ------------------------------------------------------------------

    async def request_ownership_challenge(self, address: str) -> str:
        """Message the wallet at ``address`` must sign to submit a claim."""
        return f"{address}:{self._now()}:{CHALLENGE_TAG}"

    @staticmethod
    def _challenge_time(challenge: str) -> int:
        try:
            field = challenge.split(':')[1]
        except (AttributeError, IndexError) as exc:
            raise ProtocolError(f"Malformed ownership challenge: {challenge!r}") from exc

        # Plain ASCII digits only; int() would also take "+1", " 1" or "1_0"
        if not (field.isascii() and field.isdigit()):
            raise ProtocolError(f"Malformed ownership challenge: {challenge!r}")
        return int(field)

    async def submit_star_claim(self, address: str, challenge: str,
                                signature: str, star_data: Any) -> Block:
        """
        Register a star for ``address``.

        Algorithm:
        1. Read the issue time from the challenge
        2. Reject challenges older than the allowed window
        3. Verify the signature over the challenge against the address
        4. Append a block carrying the star and its owner

        Raises:
            ProtocolError: Challenge cannot be parsed
            ExpiredChallengeError: Challenge is too old
            SignatureError: Signature does not match address and challenge
            ClaimSubmissionError: Any other failure before the append
            ChainIntegrityError: The append itself was rejected
        """
        try:
            issued_at = self._challenge_time(challenge)
            elapsed_minutes = (self._now() - issued_at) / 60
            if elapsed_minutes > self._challenge_window:
                raise ExpiredChallengeError(
                    f"More than {self._challenge_window} mins elapsed "
                    f"since the signing of the message"
                )

            if not verify_message(challenge, address, signature):
                raise SignatureError("Not able to verify the message")

            block = Block.create({'star': star_data, 'owner': address}, owner=address)
        except ClaimSubmissionError as exc:
            logger.warning("Rejected star claim from %s: %s", address, exc)
            raise
        except Exception as exc:
            raise ClaimSubmissionError("Error while adding the block to chain") from exc

        return await self.append_block(block)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get_chain_height(self) -> int:
        return self.height

    async def get_block_by_hash(self, block_hash: str) -> Optional[Block]:
        for block in self.chain:
            if block.hash == block_hash:
                return block
        return None

    async def get_block_by_height(self, height: int) -> Optional[Block]:
        for block in self.chain:
            if block.height == height:
                return block
        return None

    async def get_claims_by_address(self, address: str) -> List[Dict[str, Any]]:
        """
        Decoded claim records owned by ``address``, in chain order.

        Returns an empty list when the address owns nothing.
        """
        return [
            block.decode_data()
            for block in self.chain
            if block.height != GENESIS_HEIGHT and block.owner == address
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @staticmethod
    def _find_errors(blocks: Sequence[Block]) -> List[int]:
        """
        Indices of blocks that fail validation or break the link to the next.

        An index is listed once per violation, so a block with both a bad
        hash and a broken link appears twice.
        """
        errors = []
        for i in range(len(blocks) - 1):
            if not blocks[i].validate():
                errors.append(i)
            if blocks[i].hash != blocks[i + 1].previous_hash:
                errors.append(i)
        return errors

    async def validate_block(self, height: int) -> bool:
        """Recompute the hash of the block at ``height``."""
        block = await self.get_block_by_height(height)
        if block is None:
            logger.warning("Block #%d not found", height)
            return False

        if not block.validate():
            logger.warning(
                "Block #%d invalid hash: %s <> %s",
                height, block.hash, block.compute_hash()
            )
            return False
        return True

    async def validate_chain(self) -> List[int]:
        """
        Validate the whole chain.

        Returns:
            Offending block indices; empty when the chain is valid
        """
        errors = self._find_errors(self.chain)
        if errors:
            logger.warning("Block errors = %d", len(errors))
        else:
            logger.info("No errors detected")
        return errors

    def print_chain(self) -> None:
        """Print the blockchain."""
        print(f"\nStar registry (height={self.height})")
        print("=" * 60)
        for block in self._chain:
            print(block)
            print("-" * 40)
