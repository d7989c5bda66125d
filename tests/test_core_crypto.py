"""
Unit tests for the from-scratch hash primitives.

Tests:
- SHA-256 against NIST vectors and hashlib
- RIPEMD-160 against the reference test vectors
- hash160 / double SHA-256 composition
"""

import hashlib

import pytest

from starregistry.core_crypto.hashing import (
    sha256, sha256_hex, sha256d, ripemd160, hash160
)


class TestSHA256:
    """Unit tests for SHA-256 implementation."""

    def test_empty_string(self):
        expected = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        assert sha256_hex(b"") == expected

    def test_abc(self):
        expected = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
        assert sha256_hex(b"abc") == expected

    def test_two_block_message(self):
        """448-bit message forces a second padding chunk."""
        msg = b"abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq"
        expected = "248d6a61d20638b8e5c026930c3e6039a33ce45964ff2167f6ecedd419db06c1"
        assert sha256_hex(msg) == expected

    @pytest.mark.parametrize("length", [55, 56, 63, 64, 65, 119, 1000])
    def test_padding_boundaries_match_hashlib(self, length):
        data = bytes(range(256)) * 4
        data = data[:length]
        assert sha256(data) == hashlib.sha256(data).digest()

    def test_returns_32_bytes(self):
        assert len(sha256(b"test")) == 32

    def test_double_sha256(self):
        expected = hashlib.sha256(hashlib.sha256(b"hello").digest()).digest()
        assert sha256d(b"hello") == expected


class TestRIPEMD160:
    """Reference vectors from the RIPEMD-160 authors."""

    @pytest.mark.parametrize("message,expected", [
        (b"", "9c1185a5c5e9fc54612808977ee8f548b2258d31"),
        (b"a", "0bdc9d2d256b3ee9daae347be6f4dc835a467ffe"),
        (b"abc", "8eb208f7e05d987a9b044a8e98c6b087f15a0bfc"),
        (b"message digest", "5d0689ef49d2fae572b881b123a85ffa21595f36"),
        (b"abcdefghijklmnopqrstuvwxyz", "f71c27109c692c1b56bbdceb5b9d2865b3708dbc"),
    ])
    def test_vectors(self, message, expected):
        assert ripemd160(message).hex() == expected

    def test_returns_20_bytes(self):
        assert len(ripemd160(b"x" * 200)) == 20


class TestHash160:

    def test_generator_point_pubkey(self):
        """hash160 of the compressed public key for private key 1."""
        pubkey = bytes.fromhex(
            "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
        )
        assert hash160(pubkey).hex() == "751e76e8199196d454941c45d1b3a323f1433bd6"

    def test_composition(self):
        assert hash160(b"data") == ripemd160(sha256(b"data"))
