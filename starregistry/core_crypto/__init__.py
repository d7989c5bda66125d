# Core Cryptography Module
"""
From-scratch hash primitives:
- SHA-256 (block identity, message digests)
- RIPEMD-160 (address hashing)
"""
