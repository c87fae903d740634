"""
Paillier: additively homomorphic public-key encryption.

Main components:
- Key generation from two probable primes
- Randomized encryption, decryption and homomorphic operators
- Detached signatures over the same key material
- Zero-knowledge proofs that a ciphertext encrypts one of a set of values
"""

__version__ = '1.0.0'

from .common.errors import (
    PaillierError,
    InvertibilityError,
    InvalidParameterError,
    MalformedInputError,
)
from .common.numbers import gcd, extended_gcd, mod_inv, mod_pow
from .common.primes import (
    is_probably_prime,
    is_coprime,
    generate_prime,
    generate_coprime,
)
from .common.paillier import (
    PublicKey,
    PrivateKey,
    generate_keypair,
    r_encrypt,
    encrypt,
    encrypt_with_randomness,
    decrypt,
    e_add,
    e_add_const,
    e_mul_const,
    rerandomize,
    recover_randomness,
)
from .common.signatures import Signature, hash_to_int, sign, valid_signature
from .common.utils import parse_int
from .config import PaillierConfig, DEFAULT_CONFIG, get_config
from .zkp.membership import ZKPCommit, ProofMembership, verify_zkp

__all__ = [
    # Errors
    'PaillierError',
    'InvertibilityError',
    'InvalidParameterError',
    'MalformedInputError',
    # Number theory
    'gcd',
    'extended_gcd',
    'mod_inv',
    'mod_pow',
    'is_probably_prime',
    'is_coprime',
    'generate_prime',
    'generate_coprime',
    # Cryptosystem
    'PublicKey',
    'PrivateKey',
    'generate_keypair',
    'r_encrypt',
    'encrypt',
    'encrypt_with_randomness',
    'decrypt',
    'e_add',
    'e_add_const',
    'e_mul_const',
    'rerandomize',
    'recover_randomness',
    # Signatures
    'Signature',
    'hash_to_int',
    'sign',
    'valid_signature',
    # Zero-knowledge proofs
    'ZKPCommit',
    'ProofMembership',
    'verify_zkp',
    # Configuration and parsing
    'PaillierConfig',
    'DEFAULT_CONFIG',
    'get_config',
    'parse_int',
]
