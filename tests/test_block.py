"""
Unit tests for the Block structure.

Tests:
- Payload encoding and the genesis access rule
- Canonical form and hash computation
- Validation of sealed and altered blocks
"""

import dataclasses
import hashlib
import json

import pytest

from starregistry.blockchain.block import Block, encode_payload
from starregistry.exceptions import GenesisAccessError


def sealed(block):
    return dataclasses.replace(block, hash=block.compute_hash())


@pytest.fixture
def block():
    return sealed(dataclasses.replace(
        Block.create({'data': 'Genesis Block'}),
        height=0,
        timestamp=1612847403,
    ))


class TestPayload:

    def test_genesis_payload_rejected(self, block):
        with pytest.raises(GenesisAccessError, match='Genesis Block'):
            block.decode_payload()

    def test_decoded_body(self, block):
        later = dataclasses.replace(block, height=1)
        assert later.decode_payload() == '{"data":"Genesis Block"}'
        assert later.decode_data() == {'data': 'Genesis Block'}

    def test_body_is_hex(self):
        assert encode_payload("hi") == b'"hi"'.hex()

    def test_unicode_roundtrip(self):
        star = {'dec': "68° 52' 56.9", 'story': 'Found star using https://www.google.com/sky/'}
        created = dataclasses.replace(Block.create(star), height=3)
        assert created.decode_data() == star

    def test_create_sets_owner(self):
        assert Block.create('x', owner='1abc').owner == '1abc'

    def test_check_payload_accepts_created_body(self):
        Block.create({'star': 'x'}).check_payload()

    @pytest.mark.parametrize('body', ['zz', '48656c6c6f', 'c3'])
    def test_check_payload_rejects_undecodable(self, body):
        with pytest.raises(ValueError):
            Block(body=body).check_payload()


class TestHashing:

    def test_canonical_field_order(self, block):
        record = json.loads(block.canonical_bytes())
        assert list(record) == ['height', 'timestamp', 'previous_hash', 'owner', 'body']

    def test_hash_excluded_from_canonical_form(self, block):
        assert b'"hash"' not in block.canonical_bytes()
        assert dataclasses.replace(block, hash='ff' * 32).compute_hash() == block.hash

    def test_hash_is_sha256_hex(self, block):
        assert block.hash == hashlib.sha256(block.canonical_bytes()).hexdigest()

    def test_deterministic(self, block):
        assert block.compute_hash() == block.compute_hash()


class TestValidate:

    def test_validate_hash_equal(self, block):
        assert block.validate()

    def test_validate_hash_not_equal(self, block):
        altered = dataclasses.replace(block, previous_hash='somejunkvalue')
        assert not altered.validate()

    @pytest.mark.parametrize('field,value', [
        ('height', 7),
        ('timestamp', 1),
        ('owner', '1mallory'),
        ('body', encode_payload('forged')),
    ])
    def test_any_field_change_detected(self, block, field, value):
        assert not dataclasses.replace(block, **{field: value}).validate()

    def test_unsealed_block_invalid(self):
        assert not Block.create('x').validate()

    def test_validate_leaves_block_unchanged(self, block):
        before = block.to_dict()
        block.validate()
        assert block.to_dict() == before


class TestImmutability:

    def test_block_frozen(self, block):
        with pytest.raises(dataclasses.FrozenInstanceError):
            block.height = 1

    def test_to_dict(self, block):
        d = block.to_dict()
        assert d['height'] == 0
        assert d['timestamp'] == 1612847403
        assert d['hash'] == block.hash
