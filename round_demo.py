#!/usr/bin/env python
import sys
import logging

import tornado.log

from mental_poker.client.client_logic import Player
from mental_poker.common.base import (Bet, BetType, PlayerSnapshot, SecretReveal,
    SignedStructure)
from mental_poker.common.helpers import get_account_from_seed

tornado.log.enable_pretty_logging()

"""
Plays the commit and reveal phases of one hand between two players in
a single process. Each player publishes a signed snapshot, the other
rebuilds them from it, and at the end every secret is revealed and
checked against its commitment. One reveal is tampered with to show a
rejected secret.
"""


def publish(player, account):
    signed = SignedStructure(player.snapshot())
    signed.sign(account)
    return signed.serialize()


def receive(serialized):
    signed = SignedStructure.deserialize(serialized)
    if signed.payload.name != PlayerSnapshot.name:
        raise ValueError("Expected a player snapshot, got " + signed.payload.name)
    if not signed.verifySignature(signed.payload.identity):
        raise ValueError("Snapshot is not signed by its player")
    return Player.from_json(signed.payload)


def main(alice_seed, bob_seed):
    players = []
    for seed in (alice_seed, bob_seed):
        account = get_account_from_seed(seed)
        logging.info("Loaded %s", account)
        player = Player(identity=account.account_id)
        player.generate_secrets().generate_points()
        players.append((player, account))

    (alice, alice_account), (bob, bob_account) = players
    alice_view_of_bob = receive(publish(bob, bob_account))
    bob_view_of_alice = receive(publish(alice, alice_account))

    bob.add_bet(Bet(BetType.CALL, 10))
    alice.add_bet(Bet(BetType.FOLD))
    logging.info("Alice folded: %s, Bob folded: %s", alice.has_folded, bob.has_folded)

    for index, secret in enumerate(bob.secrets):
        reveal = SecretReveal(index=index, secret=secret)
        if not alice_view_of_bob.apply_reveal(reveal):
            logging.error("Bob's secret #%d was rejected", index)

    for index, secret in enumerate(alice.secrets):
        if index == 0:
            secret += 1
        if not bob_view_of_alice.add_secret(index, secret):
            logging.error("Alice's secret #%d was rejected", index)

    known = sum(1 for s in bob_view_of_alice.secrets if s is not None)
    logging.info("Bob verified %d of %d secrets of Alice", known, len(alice.secrets))
    known = sum(1 for s in alice_view_of_bob.secrets if s is not None)
    logging.info("Alice verified %d of %d secrets of Bob", known, len(bob.secrets))


if __name__ == "__main__":
    if len(sys.argv) not in (1, 3):
        print("Usage: %s [<alice seed> <bob seed>]" % sys.argv[0], file=sys.stderr)
        sys.exit(1)

    if len(sys.argv) == 3:
        main(int(sys.argv[1]), int(sys.argv[2]))
    else:
        main(2, 3)
