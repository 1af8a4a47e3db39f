import random

import Crypto.PublicKey.ECC as ECC
import Crypto.PublicKey.RSA as RSA

from mental_poker.common.base import AccountIdentity, CARDS_IN_DECK, CURVE_NAME, KEY_SIZE


"""
Random secrets and points come from pycryptodome's generator. The
*_from_seed variants use random.seed() to make them deterministic, for
example games and tests only.
"""

def get_random_secrets(count=CARDS_IN_DECK + 1, randfunc=None):
	# A secret is a private scalar of the curve, in [1, n-1]
	kwargs = {"curve": CURVE_NAME}
	if randfunc is not None:
		kwargs["randfunc"] = randfunc
	return [int(ECC.generate(**kwargs).d) for i in range(count)]


def get_random_points(count=CARDS_IN_DECK, randfunc=None):
	kwargs = {"curve": CURVE_NAME}
	if randfunc is not None:
		kwargs["randfunc"] = randfunc
	return [ECC.generate(**kwargs).pointQ for i in range(count)]


def _from_seed(seed, generate):
	restore = random.getstate()
	random.seed(seed)
	def get_random_bytes(size):
		return bytes(random.getrandbits(8) for i in range(size))
	try:
		return generate(get_random_bytes)
	finally:
		random.setstate(restore)


def get_account_from_seed(seed, bits=KEY_SIZE):
	key = _from_seed(seed, lambda randfunc: RSA.generate(bits, randfunc))
	return AccountIdentity(private_key=key)


def get_secrets_from_seed(seed, count=CARDS_IN_DECK + 1):
	return _from_seed(seed, lambda randfunc: get_random_secrets(count, randfunc))


def get_points_from_seed(seed, count=CARDS_IN_DECK):
	return _from_seed(seed, lambda randfunc: get_random_points(count, randfunc))
