"""
Probabilistic primality testing and rejection-sampled generation of primes
and coprime values. All randomness comes from pycryptodome's CSPRNG.
"""

import logging
from typing import Optional

import gmpy2
from Crypto.Random import random

from paillier.common.errors import InvalidParameterError
from paillier.common.numbers import gcd
from paillier.config import DEFAULT_CONFIG, PaillierConfig

logger = logging.getLogger(__name__)

SMALL_PRIMES = (
    2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41,
    43, 47, 53, 59, 61, 67, 71, 73, 79, 83, 89, 97,
)

def _miller_rabin(n: int, rounds: int) -> bool:
    """
    Miller-Rabin test for odd n > 3.

    Returns False as soon as a witness of compositeness is found.
    """
    n_mpz = gmpy2.mpz(n)

    # Write n-1 as 2^r * d
    r, d = 0, n_mpz - 1
    while d % 2 == 0:
        r += 1
        d //= 2

    for _ in range(rounds):
        a = random.randint(2, n - 2)
        x = gmpy2.powmod(a, d, n_mpz)

        if x == 1 or x == n_mpz - 1:
            continue

        for _ in range(r - 1):
            x = gmpy2.powmod(x, 2, n_mpz)
            if x == n_mpz - 1:
                break
        else:
            return False
    return True


def is_probably_prime(
    candidate: int,
    rounds: Optional[int] = None,
    config: PaillierConfig = DEFAULT_CONFIG,
) -> bool:
    """
    Returns True if `candidate` is probably prime, False if it is composite.

    The small-prime table gives an exact answer for anything it divides;
    everything else goes through `rounds` rounds of Miller-Rabin (default
    `config.prime_rounds`), so the false-positive probability is at most
    4^-rounds.
    """
    if rounds is None:
        rounds = config.prime_rounds
    candidate = int(candidate)
    if candidate < 2:
        return False
    for p in SMALL_PRIMES:
        if candidate == p:
            return True
        if candidate % p == 0:
            return False
    return _miller_rabin(candidate, rounds)


def is_coprime(p: int, q: int) -> bool:
    """Euclidean coprimality test: gcd(p, q) == 1."""
    return gcd(p, q) == 1


def _check_bits(bits: int, config: PaillierConfig) -> None:
    if bits < config.min_prime_bits:
        raise InvalidParameterError(f"Bits less than {config.min_prime_bits}: {bits}")


def _random_odd(bits: int) -> int:
    """Random odd integer in [2^(bits-1) + 1, 2^bits - 1]."""
    lower_bound = 2 ** (bits - 1) + 1
    size = 2**bits - lower_bound
    return (lower_bound + random.randrange(size)) | 1


def generate_prime(
    bits: int,
    rounds: Optional[int] = None,
    config: PaillierConfig = DEFAULT_CONFIG,
) -> int:
    """Generates a random probable prime of exactly `bits` bits."""
    _check_bits(bits, config)
    if rounds is None:
        rounds = config.prime_rounds

    attempts = 0
    while True:
        attempts += 1
        possible = _random_odd(bits)
        if is_probably_prime(possible, rounds):
            logger.debug("Found %d-bit prime after %d candidates", bits, attempts)
            return possible


def generate_coprime(
    bits: int, target: int, config: PaillierConfig = DEFAULT_CONFIG
) -> int:
    """
    Generates a random odd `bits`-bit integer coprime to `target`.

    A value sharing a factor with a large modulus would factor it outright,
    which happens with negligible probability; above the configured threshold
    the gcd test is skipped and the first sample is returned.
    """
    _check_bits(bits, config)

    no_test_needed = target > 2**config.coprime_test_threshold_bits

    attempts = 0
    while True:
        attempts += 1
        possible = _random_odd(bits)
        if no_test_needed or is_coprime(possible, target):
            if attempts > 1:
                logger.debug("Found coprime after %d candidates", attempts)
            return possible
