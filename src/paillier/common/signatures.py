"""
Detached signatures derived from the Paillier trapdoor.

A signature on h = H(message) is the pair (s1, s2) with
g^s1 * s2^N == h (mod N^2); producing it requires lambda, checking it only
needs N.
"""

from typing import Union
import hashlib

import gmpy2

from paillier.common.numbers import L, mod_inv
from paillier.common.paillier import PrivateKey, PublicKey
from paillier.common.utils import join_ints, parse_int_list

Message = Union[int, str]


class Signature:
    """A Paillier signature (s1, s2), both reduced mod N."""

    def __init__(self, s1: int, s2: int):
        self.s1 = int(s1)
        self.s2 = int(s2)

    def to_string(self) -> str:
        """Serializes the signature as "s1,s2"."""
        return join_ints([self.s1, self.s2])

    @staticmethod
    def from_string(string: str) -> "Signature":
        """Reconstructs a Signature from the output of `to_string`."""
        s1, s2 = parse_int_list(string, expected=2)
        return Signature(s1, s2)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Signature(s1={self.s1}, s2={self.s2})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Signature):
            return NotImplemented
        return self.s1 == other.s1 and self.s2 == other.s2

    def __hash__(self) -> int:
        return hash((self.s1, self.s2))


def hash_to_int(message: Message) -> int:
    """
    SHA-256 of the message's canonical string form, read as a base-16 integer.

    An integer and its decimal string therefore hash to the same value.
    """
    return int(hashlib.sha256(str(message).encode()).hexdigest(), 16)


def sign(priv: PrivateKey, pub: PublicKey, data: Message) -> Signature:
    """Returns a detached signature for any message."""
    n, n_square = pub.n, pub.n_square
    h = hash_to_int(data)

    numerator = L(gmpy2.powmod(h, priv.lambda_n, n_square), n)
    denominator = L(gmpy2.powmod(pub.g, priv.lambda_n, n_square), n)
    s1 = (numerator * mod_inv(denominator, n)) % n

    inverse_n = mod_inv(n, priv.lambda_n)
    inverse_g = mod_inv(int(gmpy2.powmod(pub.g, s1, n)), n)
    s2 = gmpy2.powmod(h * inverse_g, inverse_n, n)

    return Signature(s1, int(s2))


def valid_signature(pub: PublicKey, message: Message, sig: Signature) -> bool:
    """Returns True if `sig` is a valid signature on `message` under `pub`."""
    h = hash_to_int(message)
    n_square = gmpy2.mpz(pub.n_square)
    a = gmpy2.powmod(pub.g, sig.s1, n_square)
    b = gmpy2.powmod(sig.s2, pub.n, n_square)
    sighash = (a * b) % n_square
    return h == sighash
