"""
Modular arithmetic helpers. Heavy lifting (powmod, multiplication of
multi-thousand-bit values) is delegated to gmpy2; the Euclidean routines are
written out so their failure modes map onto the package's error taxonomy.
"""

from typing import Tuple
import hashlib

import gmpy2
from Crypto.Random import random

from paillier.common.errors import InvertibilityError


def gcd(u: int, v: int) -> int:
    """Iterative Euclidean algorithm. gcd(u, 0) == u."""
    u, v = gmpy2.mpz(u), gmpy2.mpz(v)
    while v > 0:
        u, v = v, u % v
    return int(u)


def extended_gcd(a: int, b: int) -> Tuple[int, int]:
    """
    Returns (g, x) with g = gcd(|a|, |b|) and a*x == g (mod b).

    Only the Bezout coefficient for `a` is tracked; it is negated when `a` is
    negative so the congruence holds for the signed input.
    """
    last_remainder = gmpy2.mpz(abs(a))
    remainder = gmpy2.mpz(abs(b))
    x, last_x = gmpy2.mpz(0), gmpy2.mpz(1)
    while remainder != 0:
        quotient, new_remainder = gmpy2.f_divmod(last_remainder, remainder)
        last_remainder, remainder = remainder, new_remainder
        x, last_x = last_x - quotient * x, x
    return int(last_remainder), int(last_x * (-1 if a < 0 else 1))


def mod_inv(a: int, m: int) -> int:
    """Returns b in [0, m) such that a*b == 1 (mod m)."""
    if a == 0:
        raise InvertibilityError(f"0 has no inverse mod {m}")
    g, x = extended_gcd(a, m)
    if g != 1:
        raise InvertibilityError(f"{a} has no inverse mod {m}")
    return x % m


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """Returns (base ** exponent) % modulus for arbitrarily large operands."""
    return int(gmpy2.powmod(base, exponent, modulus))


def lcm(a: int, b: int) -> int:
    """Least common multiple via the iterative gcd."""
    return abs(a * b) // gcd(a, b)


def L(u: int, n: int) -> int:
    """Implements the Paillier L function: L(u) = (u - 1) // n."""
    return int((gmpy2.mpz(u) - 1) // n)


def get_random_positive_relatively_prime_int(n: int) -> int:
    """Returns a random integer x where 0 < x < n and gcd(x, n) == 1."""
    while True:
        x = random.randrange(1, int(n))
        if gmpy2.gcd(x, n) == 1:
            return x


def is_in_interval(x: int, bound: int) -> bool:
    """Checks if x is in the interval [0, bound)."""
    return 0 <= x < bound


def check_invertible_and_valid_mod(modulus: int, *vals: int) -> bool:
    """
    Checks if all provided values are in the range (0, modulus) and are
    relatively prime to the modulus.
    """
    for v in vals:
        if not (0 < v < modulus):
            return False
        if gmpy2.gcd(v, modulus) != 1:
            return False
    return True


def rejection_sample(modulus: int, h: int) -> int:
    """
    Expands a hash output 'h' into an integer in [0, modulus-1].

    SHA-256 blocks of h, h+1, ... are concatenated until the accumulator is
    at least as large as the modulus, then reduced.
    """
    r = 0
    i = 0
    while r < modulus:
        inb = str(h + i).encode()
        r = (r << 256) | int.from_bytes(hashlib.sha256(inb).digest(), "big")
        i += 1
    return r % modulus
