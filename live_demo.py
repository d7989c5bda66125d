#!/usr/bin/env python
"""
╔══════════════════════════════════════════════════════════════════════════════╗
║                        STAR REGISTRY LIVE DEMO                                ║
╚══════════════════════════════════════════════════════════════════════════════╝

Walks through the star registry ledger:
- Genesis block and chain height
- Ownership challenge signed by a wallet
- Star claim submission and lookup
- Rejected claims (bad signature, expired challenge)
- Tamper detection through chain validation

Pass --no-pause to run straight through.
"""

import asyncio
import sys

from starregistry.log import configure_logging
from starregistry import (
    Block, Ledger, WalletKeys, GenesisAccessError,
    SignatureError, ExpiredChallengeError,
)


PAUSE = "--no-pause" not in sys.argv


def print_header(title):
    """Print a formatted section header"""
    print("\n" + "═" * 70)
    print(f"  {title}")
    print("═" * 70)


def print_step(step_num, description):
    """Print a numbered step"""
    print(f"\n  [{step_num}] {description}")


def pause(message="Press ENTER to continue..."):
    """Pause for presenter to explain"""
    if PAUSE:
        print(f"\n  [PAUSE] {message}")
        input()


async def main():
    print("\n" * 2)
    print("╔" + "═" * 68 + "╗")
    print("║" + "        STAR REGISTRY - SIGNED OWNERSHIP LEDGER".center(68) + "║")
    print("╚" + "═" * 68 + "╝")

    print_header("PART 1: GENESIS")

    configure_logging()
    ledger = Ledger()
    genesis = await ledger.get_block_by_height(0)
    print(f"\n  Chain height: {await ledger.get_chain_height()}")
    print(f"  Genesis hash: {genesis.hash[:32]}...")
    try:
        genesis.decode_payload()
    except GenesisAccessError as exc:
        print(f"  [OK] Genesis payload is sealed: {exc}")

    pause()

    print_header("PART 2: CLAIMING A STAR")

    alice = WalletKeys.generate()
    address = alice.address()
    print_step("2.1", f"Alice's wallet address: {address}")

    challenge = await ledger.request_ownership_challenge(address)
    print_step("2.2", f"Challenge to sign: {challenge}")

    signature = alice.sign_message(challenge)
    print_step("2.3", f"Signature: {signature[:40]}...")

    star = {'dec': "68° 52' 56.9", 'ra': '16h 29m 1.0s', 'story': 'First star'}
    block = await ledger.submit_star_claim(address, challenge, signature, star)
    print_step("2.4", f"Claim stored in block #{block.height}")
    print(f"  Hash: {block.hash[:32]}...")
    print(f"  Prev: {block.previous_hash[:32]}...")

    claims = await ledger.get_claims_by_address(address)
    print_step("2.5", f"Alice owns {len(claims)} star(s): {claims[0]['star']['story']}")

    pause()

    print_header("PART 3: REJECTED CLAIMS")

    mallory = WalletKeys.generate()
    print_step("3.1", "Mallory signs Alice's challenge")
    forged = mallory.sign_message(challenge)
    try:
        await ledger.submit_star_claim(address, challenge, forged, star)
    except SignatureError as exc:
        print(f"  [X] {exc}")

    print_step("3.2", "Alice replays a challenge from ten minutes ago")
    stale = f"{address}:{genesis.timestamp - 600}:starRegistry"
    try:
        await ledger.submit_star_claim(address, stale, alice.sign_message(stale), star)
    except ExpiredChallengeError as exc:
        print(f"  [X] {exc}")

    pause()

    print_header("PART 4: TAMPER DETECTION")

    await ledger.append_block(Block.create("Filler block"))
    print(f"\n  Errors before tampering: {await ledger.validate_chain()}")

    target = ledger.chain[1]
    object.__setattr__(target, 'owner', mallory.address())
    print(f"  Rewrote owner of block #1 to {target.owner}")
    print(f"  Errors after tampering: {await ledger.validate_chain()}")

    ledger.print_chain()


if __name__ == "__main__":
    asyncio.run(main())
