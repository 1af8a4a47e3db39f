"""
Contains the state a player keeps during a game: the commitments to
their secrets, the secrets revealed so far, their points, bets and hand
"""
import logging

from mental_poker.client.client_crypto import PlayerCrypto
from mental_poker.common.base import (BetType, CARDS_IN_DECK, PlayerDataError,
    PlayerSnapshot)


class Player(object):
    """
    A mutable object which represents a player of a game.

    identity - public identifier of the player (an account ID)
    points - curve points generated by the player
    secrets - one slot per card plus one shared slot; a slot is None
              until its secret is known. Shall not be modified directly,
              use add_secret
    secret_hashes - commitments to the secrets, published before any
                    of them is revealed
    bets - bets made by the player, oldest first
    cards_in_hand - cards currently held by the player

    Any subset of the fields may be given. When all of the secrets are
    given but no hashes, the player commits to their own secrets.
    """
    def __init__(self, identity=None, points=None, secrets=None,
                 secret_hashes=None, bets=None, cards_in_hand=None,
                 crypto=None, cards_in_deck=CARDS_IN_DECK):
        if crypto is None:
            crypto = PlayerCrypto(cards_in_deck)
        self.crypto = crypto
        self.identity = identity
        self.points = list(points) if points is not None else []
        if secrets is not None:
            self.secrets = list(secrets)
        else:
            self.secrets = [None] * (cards_in_deck + 1)
        self.secret_hashes = list(secret_hashes) if secret_hashes is not None else []
        self.bets = list(bets) if bets is not None else []
        self.cards_in_hand = list(cards_in_hand) if cards_in_hand is not None else []

        # Force setting secret_hashes if all the secrets are known
        if not self.secret_hashes and all(s is not None for s in self.secrets):
            self.secret_hashes = self.crypto.commit(self.secrets)

    @classmethod
    def from_json(cls, obj, crypto=None, cards_in_deck=CARDS_IN_DECK):
        """
        Rebuilds the public view of another player from their snapshot.
        Secrets start out empty and have to be revealed one by one.
        """
        if isinstance(obj, PlayerSnapshot):
            obj = obj.data
        if not isinstance(obj, dict):
            raise PlayerDataError("Player snapshot must be an object")
        unknown = set(obj) - set(PlayerSnapshot.keys)
        if unknown:
            raise PlayerDataError("Unknown snapshot fields: " + ", ".join(sorted(unknown)))

        if crypto is None:
            crypto = PlayerCrypto(cards_in_deck)

        identity = obj.get("identity")
        if identity is not None and not isinstance(identity, str):
            raise PlayerDataError("Identity must be a string")

        secret_hashes = obj.get("secret_hashes", [])
        if not isinstance(secret_hashes, list):
            raise PlayerDataError("Secret hashes must be a list")
        if secret_hashes and len(secret_hashes) != cards_in_deck + 1:
            raise PlayerDataError("Expected %d secret hashes, got %d" % (
                cards_in_deck + 1, len(secret_hashes)))
        if not all(isinstance(h, str) for h in secret_hashes):
            raise PlayerDataError("Secret hashes must be strings")

        points = obj.get("points", [])
        if not isinstance(points, list):
            raise PlayerDataError("Points must be a list")
        try:
            points = [crypto.point_from_json(p) for p in points]
        except (KeyError, TypeError, ValueError) as e:
            raise PlayerDataError("Malformed point: %s" % e)

        return cls(identity=identity, points=points,
                   secret_hashes=secret_hashes, crypto=crypto,
                   cards_in_deck=cards_in_deck)

    def short_id(self):
        if not self.identity:
            return "<anonymous>"
        return self.identity[0:8] + "..."

    @property
    def has_folded(self):
        if not self.bets:
            return False

        return self.bets[-1].type == BetType.FOLD

    def add_bet(self, bet):
        # no betting rules here; folded players may still be given bets
        self.bets.append(bet)
        if bet.type == BetType.FOLD:
            logging.info("Player %s folded", self.short_id())

    def add_secret(self, index, secret):
        """
        Adds and verifies a secret at the given index.

        Returns False when the secret does not match its commitment,
        otherwise True. A slot which is already filled is never
        overwritten. Re-adding to a filled slot always returns True; the
        stored and given values are compared only to log a warning about
        a player revealing two different secrets.
        """
        if not 0 <= index < len(self.secrets):
            raise IndexError("Secret index out of range: %d" % index)

        # Avoid re-addition of secrets
        if self.secrets[index] is not None:
            if self.secrets[index] != secret:
                logging.warning("Player %s revealed a different secret #%d; "
                                "keeping the first one", self.short_id(), index)
            return True

        commitment = None
        if index < len(self.secret_hashes):
            commitment = self.secret_hashes[index]

        if not self.crypto.reveal_correct(commitment, secret):
            logging.info("Secret #%d of player %s does not match its commitment",
                         index, self.short_id())
            return False

        self.secrets[index] = secret
        return True

    def apply_reveal(self, reveal):
        """
        Adds a secret revealed by another player. Reveals with a missing
        or non-integer field, or an index outside the deck, are rejected
        with False like a secret that does not match its commitment.
        """
        index = getattr(reveal, "index", None)
        secret = getattr(reveal, "secret", None)
        for value in (index, secret):
            if not isinstance(value, int) or isinstance(value, bool):
                logging.info("Malformed reveal from player %s: %r", self.short_id(), reveal)
                return False
        if not 0 <= index < len(self.secrets):
            logging.info("Reveal from player %s has index %d outside the deck",
                         self.short_id(), index)
            return False
        return self.add_secret(index, secret)

    def generate_points(self):
        self.points = self.crypto.generate_points()
        return self

    def generate_secrets(self):
        self.secrets = self.crypto.generate_secrets()
        self.secret_hashes = self.crypto.commit(self.secrets)
        return self

    def to_json(self):
        result = dict()
        if self.identity:
            result["identity"] = self.identity
        if self.points:
            result["points"] = [self.crypto.point_to_json(p) for p in self.points]
        if self.secret_hashes:
            result["secret_hashes"] = list(self.secret_hashes)
        return result

    def snapshot(self):
        return PlayerSnapshot(**self.to_json())

    def __repr__(self):
        return "Player<%s>" % self.short_id()
