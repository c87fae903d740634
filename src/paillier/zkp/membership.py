"""
Implements a non-interactive zero-knowledge proof that a Paillier ciphertext
encrypts one member of a public, ordered candidate set without revealing
which one.

The proof is a disjunction of Sigma protocols for "u_j = c * g^(-m_j) is an
N-th power", one branch per candidate m_j. The branch for the real plaintext
is answered honestly; every other branch is simulated by choosing its
challenge and response first. The Fiat-Shamir challenge hashes the key, the
ciphertext, the ordered candidates and all first messages, and the branch
challenges must sum to it, so at most one branch can be simulated away.
"""

from typing import List, Sequence
import logging

import gmpy2
from Crypto.Random import random

from paillier.common.errors import InvalidParameterError, MalformedInputError
from paillier.common.numbers import (
    check_invertible_and_valid_mod,
    get_random_positive_relatively_prime_int,
    is_in_interval,
    mod_inv,
    rejection_sample,
)
from paillier.common.paillier import PublicKey, encrypt_with_randomness, r_encrypt
from paillier.common.utils import join_ints, parse_int_list
from paillier.config import DEFAULT_CONFIG, PaillierConfig
from paillier.zkp.hash import transcript_hash

logger = logging.getLogger(__name__)

MEMBERSHIP_TAG = b"paillier/zkp/membership"
ZKPCommitSections = 3
SECTION_DELIMITER = ";"


def challenge_bits(pk: PublicKey, config: PaillierConfig = DEFAULT_CONFIG) -> int:
    """Width t of branch challenges; 2^t stays below the smaller prime of N."""
    return max(1, min(config.challenge_bits, pk.n.bit_length() // 2 - 1))


def _membership_bases(pk: PublicKey, c: int, messages: Sequence[int]) -> List[gmpy2.mpz]:
    """u_j = c * g^(-m_j) mod N^2, using g^(-m) = 1 - m*N (mod N^2)."""
    n = gmpy2.mpz(pk.n)
    n_square = gmpy2.mpz(pk.n_square)
    c = gmpy2.mpz(c)
    return [(c * ((1 - (m % n) * n) % n_square)) % n_square for m in messages]


def _challenge(
    pk: PublicKey, c: int, messages: Sequence[int], A: Sequence[int], t: int
) -> int:
    e_hash = transcript_hash(
        MEMBERSHIP_TAG,
        pk.n,
        pk.g,
        c,
        len(messages),
        *[m % pk.n for m in messages],
        *A,
    )
    return rejection_sample(2**t, e_hash)


class ZKPCommit:
    """
    The transcript of a membership proof: first messages A, branch
    challenges E and responses Z, one entry per candidate.
    """

    def __init__(self, A: List[int], E: List[int], Z: List[int]):
        self.A = [int(a) for a in A]
        self.E = [int(e) for e in E]
        self.Z = [int(z) for z in Z]

    def to_string(self) -> str:
        """Serializes the commitment as "A1,..,Ak;E1,..,Ek;Z1,..,Zk"."""
        return SECTION_DELIMITER.join(join_ints(part) for part in (self.A, self.E, self.Z))

    @staticmethod
    def from_string(string: str) -> "ZKPCommit":
        """Deserializes a ZKPCommit from the output of `to_string`."""
        if not isinstance(string, str):
            raise MalformedInputError(f"Expected a string, got {type(string).__name__}")
        sections = string.split(SECTION_DELIMITER)
        if len(sections) != ZKPCommitSections:
            raise MalformedInputError(
                f"expected {ZKPCommitSections} sections to construct ZKPCommit"
            )
        A, E, Z = (parse_int_list(section) for section in sections)
        if not (len(A) == len(E) == len(Z)):
            raise MalformedInputError("ZKPCommit sections differ in length")
        return ZKPCommit(A, E, Z)

    def validate_basic(self) -> bool:
        """Performs basic shape checks on the commitment components."""
        return len(self.A) > 0 and len(self.A) == len(self.E) == len(self.Z)

    def verify(
        self,
        pk: PublicKey,
        ciphertext: int,
        valid_messages: Sequence[int],
        config: PaillierConfig = DEFAULT_CONFIG,
    ) -> bool:
        """
        Verifies that `ciphertext` encrypts a member of `valid_messages`.

        The candidate sequence must be the one the proof was built for,
        in the same order.
        """
        if not self.validate_basic() or len(self.A) != len(valid_messages):
            return False

        messages = [int(m) for m in valid_messages]
        c = int(ciphertext)
        N, NSq = gmpy2.mpz(pk.n), gmpy2.mpz(pk.n_square)
        t = challenge_bits(pk, config)

        if not check_invertible_and_valid_mod(pk.n_square, c, *self.A):
            return False
        if not check_invertible_and_valid_mod(pk.n, *self.Z):
            return False
        if not all(is_in_interval(e, 2**t) for e in self.E):
            return False

        # Recompute challenge.
        e = _challenge(pk, c, messages, self.A, t)
        if sum(self.E) % 2**t != e:
            return False

        # Verify the branch equation z_j^N == a_j * u_j^e_j (mod N^2).
        U = _membership_bases(pk, c, messages)
        for a, e_j, z, u in zip(self.A, self.E, self.Z, U):
            left = gmpy2.powmod(z, N, NSq)
            right = (a * gmpy2.powmod(u, e_j, NSq)) % NSq
            if left != right:
                return False

        return True

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"ZKPCommit(branches={len(self.A)})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, ZKPCommit):
            return NotImplemented
        return self.A == other.A and self.E == other.E and self.Z == other.Z

    def __hash__(self) -> int:
        return hash((tuple(self.A), tuple(self.E), tuple(self.Z)))


class ProofMembership:
    """
    A ciphertext together with the commitment proving that it encrypts one
    of the announced candidates.
    """

    def __init__(self, ciphertext: int, commitment: ZKPCommit):
        self.ciphertext = ciphertext
        self.commitment = commitment

    @staticmethod
    def new_proof(
        pk: PublicKey,
        plaintext: int,
        valid_messages: Sequence[int],
        config: PaillierConfig = DEFAULT_CONFIG,
    ) -> "ProofMembership":
        """Encrypts `plaintext` and proves it lies in `valid_messages`."""
        ProofMembership._check_candidates(pk, plaintext, valid_messages)
        r, c = r_encrypt(pk, plaintext, config)
        return ProofMembership.new_proof_with_randomness(
            pk, c, r, plaintext, valid_messages, config
        )

    @staticmethod
    def new_proof_with_randomness(
        pk: PublicKey,
        ciphertext: int,
        r: int,
        plaintext: int,
        valid_messages: Sequence[int],
        config: PaillierConfig = DEFAULT_CONFIG,
    ) -> "ProofMembership":
        """
        Builds the proof for an existing ciphertext, given the randomness `r`
        it was encrypted with.
        """
        ProofMembership._check_candidates(pk, plaintext, valid_messages)
        c = int(ciphertext)
        if encrypt_with_randomness(pk, plaintext, r) != c:
            raise InvalidParameterError("Ciphertext does not encrypt plaintext under r")

        messages = [int(m) for m in valid_messages]
        index = messages.index(int(plaintext))
        k = len(messages)

        N, NSq = gmpy2.mpz(pk.n), gmpy2.mpz(pk.n_square)
        t = challenge_bits(pk, config)
        U = _membership_bases(pk, c, messages)

        A: List[int] = [0] * k
        E: List[int] = [0] * k
        Z: List[int] = [0] * k

        # Honest branch: commit to a fresh N-th power.
        rho = get_random_positive_relatively_prime_int(pk.n)
        A[index] = int(gmpy2.powmod(rho, N, NSq))

        # Simulated branches: pick the challenge and response, solve for A.
        for j in range(k):
            if j == index:
                continue
            E[j] = random.getrandbits(t)
            Z[j] = get_random_positive_relatively_prime_int(pk.n)
            zn = gmpy2.powmod(Z[j], N, NSq)
            ue = gmpy2.powmod(U[j], E[j], NSq)
            A[j] = int((zn * mod_inv(int(ue), pk.n_square)) % NSq)

        e = _challenge(pk, c, messages, A, t)
        E[index] = (e - sum(E)) % 2**t
        Z[index] = int((rho * gmpy2.powmod(r, E[index], N)) % N)

        logger.debug("Built membership proof over %d candidates", k)
        return ProofMembership(c, ZKPCommit(A, E, Z))

    @staticmethod
    def _check_candidates(pk: PublicKey, plaintext: int, valid_messages: Sequence[int]) -> None:
        messages = [int(m) for m in valid_messages]
        if int(plaintext) not in messages:
            raise InvalidParameterError(
                f"Plaintext {plaintext} is not among the {len(messages)} valid messages"
            )
        if len({m % pk.n for m in messages}) != len(messages):
            raise InvalidParameterError("Valid messages must be distinct modulo N")

    def verify(
        self,
        pk: PublicKey,
        valid_messages: Sequence[int],
        config: PaillierConfig = DEFAULT_CONFIG,
    ) -> bool:
        """Verifies this proof against `valid_messages`."""
        return self.commitment.verify(pk, self.ciphertext, valid_messages, config)


def verify_zkp(
    pk: PublicKey,
    ciphertext: int,
    valid_messages: Sequence[int],
    commitment: ZKPCommit,
    config: PaillierConfig = DEFAULT_CONFIG,
) -> bool:
    """
    Returns True iff `commitment` proves that `ciphertext` encrypts a member
    of the ordered candidate sequence `valid_messages`.
    """
    if not isinstance(commitment, ZKPCommit):
        return False
    return commitment.verify(pk, ciphertext, valid_messages, config)
