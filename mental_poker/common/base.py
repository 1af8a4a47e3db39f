"""
Shared structures for players of a mental poker game.

Every structure that travels between players is a BaseStructure: a
fixed set of keys serialized as sorted JSON, so that its hash and its
signature are the same on every machine.
"""
import base64
import hashlib
import json
from enum import IntEnum

import Crypto.PublicKey.RSA as RSA
from Crypto.Hash import SHA256
from Crypto.Signature import pkcs1_15


KEY_SIZE = 2048
CARDS_IN_DECK = 52
CURVE_NAME = "P-256"


class PlayerDataError(ValueError):
    """
    Raised when data received from another player cannot be turned
    into game state.
    """
    pass


class BaseStructure(object):
    name = "BaseStructure"
    keys = list()

    def __init__(self, **kwargs):
        self.data = dict()

        for k, v in kwargs.items():
            assert k in self.keys, "%s has no key %r" % (self.name, k)
            self.data[k] = v

    def serialize(self):
        return json.dumps(self.data, sort_keys=True)

    @classmethod
    def deserialize(cls, bytes):
        obj = json.loads(bytes)
        return cls(**obj)

    def hash(self):
        return hashlib.sha256(self.serialize().encode("utf-8")).hexdigest()

    def verifyHash(self, h):
        return h == self.hash()

    def __eq__(self, other):
        if not isinstance(other, BaseStructure) or self.name != other.name:
            return False
        for k in self.keys:
            if self.data.get(k) != other.data.get(k):
                return False
        return True

    def __ne__(self, other):
        return not self.__eq__(other)

    def __getattr__(self, attr):
        if attr == "data":
            raise AttributeError(attr)
        try:
            return self.data[attr]
        except KeyError:
            raise AttributeError(attr)

    def __setattr__(self, attr, v):
        if attr != "data" and attr != "keys" and attr in self.keys:
            self.data[attr] = v
        else:
            super(BaseStructure, self).__setattr__(attr, v)

    def __repr__(self):
        return "%s<%s>" % (self.name, self.serialize())


class AccountIdentity(BaseStructure):
    """
    The public identity of a player. The account ID is derived from the
    public key, so anyone holding the encoded key can check it.
    """
    name = "AccountIdentity"
    keys = ["account_id", "encoded_public_key"]

    def __init__(self, account_id=None, private_key=None, public_key=None,
            encoded_public_key=None):
        BaseStructure.__init__(self)
        self.private_key = private_key
        if public_key is not None:
            self.public_key = public_key
        elif encoded_public_key is not None:
            self.public_key = self.decodePublicKey(encoded_public_key)
        elif private_key is not None:
            self.public_key = private_key.publickey()
        else:
            raise PlayerDataError("AccountIdentity needs a key")

        self.account_id = account_id
        if self.account_id is None:
            self.account_id = AccountIdentity.findAccountName(self.public_key)

        self.encoded_public_key = encoded_public_key or self.encodePublicKey(
            self.public_key)

    def decodePublicKey(self, encoded):
        try:
            return RSA.import_key(base64.b64decode(encoded))
        except (ValueError, IndexError, TypeError) as e:
            raise PlayerDataError("Malformed public key: %s" % e)

    def encodePublicKey(self, public_key):
        der = public_key.export_key(format="DER")
        return base64.b64encode(der).decode("ascii")

    @classmethod
    def findAccountName(cls, public_key):
        digest = hashlib.sha256(public_key.export_key(format="DER")).hexdigest()
        return base64.b64encode(digest[-36:].encode("ascii")).decode("ascii")

    def hasPrivateKey(self):
        return self.private_key is not None and self.private_key.has_private()

    def sign(self, M):
        signature = pkcs1_15.new(self.private_key).sign(SHA256.new(M.encode("utf-8")))
        return base64.b64encode(signature).decode("ascii")

    def verifySignature(self, M, sig):
        if self.account_id != AccountIdentity.findAccountName(self.public_key):
            return False
        try:
            pkcs1_15.new(self.public_key).verify(SHA256.new(M.encode("utf-8")),
                base64.b64decode(sig))
        except (ValueError, TypeError):
            return False
        return True

    def __repr__(self):
        return "Account<%s>" % self.account_id


class SignedStructure(object):
    def __init__(self, payload, account=None, signature=None):
        assert payload
        self.account = account
        self.payload = payload
        self.signature = signature

    def sign(self, account):
        self.account = account
        self.signature = account.sign(self.payload.hash())
        return self.signature

    def verifySignature(self, account_id):
        if self.account is None or account_id != self.account.account_id:
            return False
        return self.account.verifySignature(self.payload.hash(), self.signature)

    def serialize(self):
        assert self.signature is not None
        return json.dumps({
                "payload": self.payload.serialize(),
                "signature": self.signature,
                "account": self.account.serialize(),
                "name": self.payload.name
            }, sort_keys=True)

    @classmethod
    def deserialize(cls, bytes):
        obj = json.loads(bytes)
        for k in ("name", "payload", "signature", "account"):
            if k not in obj:
                raise PlayerDataError("Signed structure is missing %r" % k)

        # find the structure class by name, only among the structures above
        payload_cls = globals().get(obj["name"])
        if not (isinstance(payload_cls, type) and issubclass(payload_cls, BaseStructure)):
            raise PlayerDataError("Unknown structure: %s" % obj["name"])
        payload = payload_cls.deserialize(obj["payload"])
        account = AccountIdentity.deserialize(obj["account"])
        return cls(payload, signature=obj["signature"], account=account)


class BetType(IntEnum):
    SMALL_BLIND = 1
    BIG_BLIND = 2
    CHECK = 3
    CALL = 4
    RAISE = 5
    FOLD = 6


class Bet(BaseStructure):
    name = "Bet"
    keys = ["type", "amount"]

    def __init__(self, type, amount=0):
        BaseStructure.__init__(self, type=BetType(type), amount=amount)


class Card(BaseStructure):
    name = "Card"
    keys = ["suit", "rank"]


class PlayerSnapshot(BaseStructure):
    """
    The part of a player which may be shown to everyone before the
    reveal phase. Never carries secrets, bets or cards.
    """
    name = "PlayerSnapshot"
    keys = ["identity", "points", "secret_hashes"]


class SecretReveal(BaseStructure):
    name = "SecretReveal"
    keys = ["index", "secret"]
