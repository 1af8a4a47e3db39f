"""
Tests for mental_poker/common/base.py

Covers:
- BaseStructure key checking, hashing and equality
- Bet type coercion
- AccountIdentity / SignedStructure signing, verification and tampering
"""

import json

import pytest

from mental_poker.common.base import (AccountIdentity, Bet, BetType, Card,
    PlayerDataError, PlayerSnapshot, SecretReveal, SignedStructure)


class TestBaseStructure:
    def test_unknown_key(self):
        with pytest.raises(AssertionError):
            Card(suit="S", colour="black")

    def test_serialize_is_sorted(self):
        card = Card(rank="Q", suit="D")
        assert card.serialize() == '{"rank": "Q", "suit": "D"}'

    def test_hash(self):
        a = Card(suit="S", rank="A")
        b = Card(rank="A", suit="S")
        assert a.hash() == b.hash()
        assert a.verifyHash(b.hash())
        assert not a.verifyHash(Card(suit="S", rank="K").hash())

    def test_equality(self):
        assert Card(suit="S", rank="A") == Card(suit="S", rank="A")
        assert Card(suit="S", rank="A") != Card(suit="H", rank="A")
        assert Card(suit="S", rank="A") != "AS"

    def test_missing_attribute(self):
        with pytest.raises(AttributeError):
            Card(suit="S").rank
        assert not hasattr(PlayerSnapshot(), "identity")


class TestBet:
    def test_type_is_coerced(self):
        bet = Bet(6)
        assert bet.type is BetType.FOLD
        assert bet.amount == 0

    def test_deserialize(self):
        bet = Bet.deserialize(Bet(BetType.RAISE, 40).serialize())
        assert bet.type is BetType.RAISE
        assert bet.amount == 40

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            Bet(99)


class TestSignedStructure:
    def test_account_id_matches_key(self, account):
        assert account.account_id == AccountIdentity.findAccountName(account.public_key)
        assert account.hasPrivateKey()

    def test_public_identity_round_trip(self, account):
        public = AccountIdentity.deserialize(account.serialize())
        assert public.account_id == account.account_id
        assert not public.hasPrivateKey()

    def test_sign_and_verify(self, account):
        reveal = SecretReveal(index=3, secret=12345)
        signed = SignedStructure(reveal)
        signed.sign(account)
        received = SignedStructure.deserialize(signed.serialize())
        assert received.payload == reveal
        assert received.verifySignature(account.account_id)

    def test_wrong_signer(self, account, other_account):
        signed = SignedStructure(PlayerSnapshot(identity=account.account_id))
        signed.sign(other_account)
        assert not signed.verifySignature(account.account_id)

    def test_tampered_payload(self, account):
        signed = SignedStructure(SecretReveal(index=0, secret=1))
        signed.sign(account)
        obj = json.loads(signed.serialize())
        obj["payload"] = SecretReveal(index=0, secret=2).serialize()
        received = SignedStructure.deserialize(json.dumps(obj))
        assert not received.verifySignature(account.account_id)

    def test_forged_account_id(self, account, other_account):
        signed = SignedStructure(SecretReveal(index=0, secret=1))
        signed.sign(account)
        obj = json.loads(signed.serialize())
        obj["account"] = json.dumps({
            "account_id": other_account.account_id,
            "encoded_public_key": account.encoded_public_key,
        })
        received = SignedStructure.deserialize(json.dumps(obj))
        assert not received.verifySignature(other_account.account_id)

    def test_unknown_structure(self, account):
        signed = SignedStructure(Card(suit="S", rank="A"))
        signed.sign(account)
        obj = json.loads(signed.serialize())
        obj["name"] = "SignedStructure"
        with pytest.raises(PlayerDataError):
            SignedStructure.deserialize(json.dumps(obj))

    def test_missing_field(self):
        with pytest.raises(PlayerDataError):
            SignedStructure.deserialize('{"name": "Card"}')

    def test_bad_public_key(self):
        with pytest.raises(PlayerDataError):
            AccountIdentity(encoded_public_key="bm90IGEga2V5")
