"""
This module provides a Python implementation of the Paillier homomorphic
cryptosystem: key generation, encryption, decryption and the homomorphic
operators. All large-integer arithmetic is delegated to gmpy2.

Ciphertexts are plain integers in [0, N^2) and carry no reference to the key
that produced them. Combining ciphertexts from different keys is not
detectable and yields garbage; tracking which key a ciphertext belongs to is
the caller's job.
"""

from typing import List, Optional, Tuple
import logging
import math

import gmpy2

from paillier.common.errors import (
    InvalidParameterError,
    MalformedInputError,
)
from paillier.common.numbers import (
    L,
    check_invertible_and_valid_mod,
    gcd,
    get_random_positive_relatively_prime_int,
    mod_inv,
)
from paillier.common.primes import generate_coprime, generate_prime
from paillier.common.utils import join_ints, parse_int, parse_int_list
from paillier.config import DEFAULT_CONFIG, PaillierConfig

logger = logging.getLogger(__name__)


# --- Core Classes ---


class PublicKey:
    """
    Represents the public part of a Paillier key pair.

    Only N is stored; N^2 and the generator g = N + 1 are derived from it and
    cached on first use.
    """

    def __init__(self, n: int):
        self.n: int = int(n)
        # Cache frequently used values.
        self._ns: Optional[int] = None
        self._g: Optional[int] = None

    @property
    def n_square(self) -> int:
        """Returns N*N, cached for efficiency."""
        if self._ns is None:
            self._ns = self.n * self.n
        return self._ns

    @property
    def g(self) -> int:
        """Returns N+1, cached for efficiency."""
        if self._g is None:
            self._g = self.n + 1
        return self._g

    def as_ints(self) -> List[int]:
        """Serializes the PublicKey to a list of integers for hashing."""
        return [self.n, self.g]

    def to_string(self) -> str:
        """Serializes the key as the decimal string of N."""
        return str(self.n)

    @staticmethod
    def from_string(string: str) -> "PublicKey":
        """Reconstructs a PublicKey from the output of `to_string`."""
        n = parse_int(string)
        if n <= 0:
            raise MalformedInputError("Public key modulus must be positive")
        return PublicKey(n)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"PublicKey(n=<{self.n.bit_length()}-bit>)"

    def __eq__(self, other) -> bool:
        if not isinstance(other, PublicKey):
            return NotImplemented
        return self.n == other.n

    def __hash__(self) -> int:
        return hash(self.n)


class PrivateKey:
    """
    Represents the secret part of a Paillier key pair: lambda = lcm(p-1, q-1)
    and mu = L(g^lambda mod N^2)^-1 mod N.

    A PrivateKey does not reference its PublicKey; every operation that needs
    N takes the public key as a separate argument.
    """

    def __init__(self, lambda_n: int, mu: int):
        self.lambda_n: int = int(lambda_n)
        self.mu: int = int(mu)

    def to_string(self) -> str:
        """Serializes the key as "lambda,mu"."""
        return join_ints([self.lambda_n, self.mu])

    @staticmethod
    def from_string(string: str) -> "PrivateKey":
        """Reconstructs a PrivateKey from the output of `to_string`."""
        lambda_n, mu = parse_int_list(string, expected=2)
        return PrivateKey(lambda_n, mu)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return "PrivateKey(<redacted>)"

    def __eq__(self, other) -> bool:
        if not isinstance(other, PrivateKey):
            return NotImplemented
        return self.lambda_n == other.lambda_n and self.mu == other.mu

    def __hash__(self) -> int:
        return hash((self.lambda_n, self.mu))


# --- Key Generation ---


def generate_keypair(
    bits: Optional[int] = None, config: PaillierConfig = DEFAULT_CONFIG
) -> Tuple[PrivateKey, PublicKey]:
    """
    Generates a Paillier key pair whose modulus is the product of two
    independently generated bits/2-bit primes.

    Returns:
        A tuple of (private_key, public_key).
    """
    if bits is None:
        bits = config.key_bits
    logger.info("Generating %d-bit Paillier keypair", bits)

    prime_bits = bits // 2
    p = generate_prime(prime_bits, config=config)
    q = generate_prime(prime_bits, config=config)
    while p == q:
        q = generate_prime(prime_bits, config=config)

    n = p * q
    n_square = n * n

    # lambda is the Carmichael function, lcm(p-1, q-1) for n=pq.
    lambda_n = ((p - 1) * (q - 1)) // gcd(p - 1, q - 1)

    # g = n + 1 always has order n in Z*_{n^2}.
    g = n + 1

    u = gmpy2.powmod(g, lambda_n, n_square)
    mu = mod_inv(L(u, n), n)

    logger.debug("Generated modulus of %d bits", n.bit_length())
    return PrivateKey(lambda_n, mu), PublicKey(n)


# --- Encryption ---


def _check_ciphertext(pub: PublicKey, *cts: int) -> None:
    for c in cts:
        if not (0 <= c < pub.n_square):
            raise MalformedInputError("Ciphertexts must be in the range [0, N^2-1]")


def _encrypt_raw(pub: PublicKey, m: int, r: int) -> int:
    n_square = gmpy2.mpz(pub.n_square)
    gm = gmpy2.powmod(pub.g, m, n_square)
    rn = gmpy2.powmod(r, pub.n, n_square)
    return int((gm * rn) % n_square)


def r_encrypt(
    pub: PublicKey, plaintext: int, config: PaillierConfig = DEFAULT_CONFIG
) -> Tuple[int, int]:
    """
    Encrypts a message and returns both the randomness and the ciphertext.

    The randomness `r` is what a prover needs to build a zero-knowledge proof
    about the ciphertext, so it is handed back to the caller.

    Returns:
        A tuple of (r, ciphertext).
    """
    m = int(plaintext) % pub.n
    bits = round(math.log2(pub.n))

    while True:
        r = generate_coprime(bits, pub.n, config=config)
        if 0 < r < pub.n:
            break

    return r, _encrypt_raw(pub, m, r)


def encrypt(pub: PublicKey, plaintext: int) -> int:
    """Encrypts a message, discarding the randomness."""
    _, c = r_encrypt(pub, plaintext)
    return c


def encrypt_with_randomness(pub: PublicKey, plaintext: int, r: int) -> int:
    """Encrypts a message using a specified random value `r`."""
    r = int(r)
    if not check_invertible_and_valid_mod(pub.n, r):
        raise InvalidParameterError(
            "Randomness must be a positive integer relatively prime to N"
        )
    return _encrypt_raw(pub, int(plaintext) % pub.n, r)


def decrypt(priv: PrivateKey, pub: PublicKey, ciphertext: int) -> int:
    """
    Decrypts a ciphertext, returning the plaintext in [0, N).

    A ciphertext that was not produced under `pub` makes the L-function
    division inexact; that is reported instead of silently truncated.
    """
    c = int(ciphertext)
    if not check_invertible_and_valid_mod(pub.n_square, c):
        raise MalformedInputError(
            "Ciphertext is mal-formed or not relatively prime to N^2"
        )

    n = gmpy2.mpz(pub.n)
    x = gmpy2.powmod(c, priv.lambda_n, pub.n_square) - 1
    quotient, remainder = gmpy2.f_divmod(x, n)
    if remainder != 0:
        raise MalformedInputError("Ciphertext was not produced under this key")

    return int((quotient * priv.mu) % n)


# --- Homomorphic Operators ---


def e_add(pub: PublicKey, c1: int, c2: int) -> int:
    """Homomorphically adds two ciphertexts: Dec(c1 * c2) = m1 + m2 mod N."""
    _check_ciphertext(pub, c1, c2)
    return int((gmpy2.mpz(c1) * c2) % pub.n_square)


def e_add_const(pub: PublicKey, c: int, k: int) -> int:
    """Adds a plaintext constant to a ciphertext: Dec(c * g^k) = m + k mod N."""
    _check_ciphertext(pub, c)
    gk = gmpy2.powmod(pub.g, int(k) % pub.n, pub.n_square)
    return int((gmpy2.mpz(c) * gk) % pub.n_square)


def e_mul_const(pub: PublicKey, c: int, k: int) -> int:
    """Multiplies a ciphertext by a plaintext scalar: Dec(c^k) = m * k mod N."""
    _check_ciphertext(pub, c)
    k = int(k)
    if k < 0:
        k = k % pub.n
    return int(gmpy2.powmod(c, k, pub.n_square))


def rerandomize(pub: PublicKey, c: int) -> Tuple[int, int]:
    """
    Multiplies a ciphertext by a fresh encryption of zero so the result is
    unlinkable to the input while decrypting to the same plaintext.

    Returns:
        A tuple of (r, new_ciphertext), the same order as `r_encrypt`.
    """
    _check_ciphertext(pub, c)
    x = get_random_positive_relatively_prime_int(pub.n)
    xn = gmpy2.powmod(x, pub.n, pub.n_square)
    return x, int((gmpy2.mpz(c) * xn) % pub.n_square)


def recover_randomness(priv: PrivateKey, pub: PublicKey, c: int) -> int:
    """Recovers the randomness `r` used to encrypt a ciphertext `c`."""
    m = decrypt(priv, pub, c)

    # c * g^(-m) = r^n mod n^2, and g^(-m) = (1+n)^(-m) = 1 - m*n (mod n^2).
    term = (1 - m * pub.n) % pub.n_square
    c0 = (gmpy2.mpz(c) * term) % pub.n_square

    # r^lambda == 1 (mod n), so raising r^n to n^-1 mod lambda returns r.
    niv = mod_inv(pub.n, priv.lambda_n)
    return int(gmpy2.powmod(c0, niv, pub.n))

