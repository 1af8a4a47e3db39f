"""
Contains the logic for committing to secrets and checking reveals
client side
"""
import hashlib

import Crypto.PublicKey.ECC as ECC

from mental_poker.common.base import CARDS_IN_DECK, CURVE_NAME
from mental_poker.common import helpers


class PlayerCrypto(object):
    """
    Contains the logic for hashing, committing and verifying secrets,
    and for generating the secrets and points of a player
    """
    def __init__(self, cards_in_deck=CARDS_IN_DECK):
        self.cards_in_deck = cards_in_deck

    def hash(self, secret):
        # secrets are ints; hash their lowercase hex text
        return hashlib.sha256(("%x" % secret).encode("ascii")).hexdigest()

    def commit(self, secrets):
        return [self.hash(secret) for secret in secrets]

    def reveal_correct(self, commitment, secret):
        if commitment is None:
            return False
        return self.hash(secret) == commitment

    def generate_secrets(self):
        # one secret per card, plus one shared by the whole deck
        return helpers.get_random_secrets(self.cards_in_deck + 1)

    def generate_points(self):
        return helpers.get_random_points(self.cards_in_deck)

    def point_to_json(self, point):
        return {"x": "%x" % int(point.x), "y": "%x" % int(point.y)}

    def point_from_json(self, obj):
        return ECC.EccPoint(int(obj["x"], 16), int(obj["y"], 16), curve=CURVE_NAME)
