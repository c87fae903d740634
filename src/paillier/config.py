"""
Configuration settings for the Paillier package.
"""

from dataclasses import dataclass, fields, replace

from paillier.common.errors import InvalidParameterError


@dataclass(frozen=True)
class PaillierConfig:
    """Cryptographic parameters configuration."""

    # Bit length of the modulus n produced by generate_keypair()
    key_bits: int = 2048
    # Miller-Rabin rounds; 50 rounds bound the false-positive rate by 2^-100
    prime_rounds: int = 50
    # Smallest prime/coprime bit length the generators accept
    min_prime_bits: int = 8
    # Above 2^this, generate_coprime() skips the gcd test
    coprime_test_threshold_bits: int = 1024
    # Upper bound on the Fiat-Shamir challenge width of membership proofs
    challenge_bits: int = 256


# Default configuration instance
DEFAULT_CONFIG = PaillierConfig()


def get_config(**overrides) -> PaillierConfig:
    """
    Get a configuration derived from the defaults.

    Args:
        **overrides: Field values replacing the defaults

    Returns:
        A new PaillierConfig instance
    """
    known = {f.name for f in fields(PaillierConfig)}
    unknown = set(overrides) - known
    if unknown:
        raise InvalidParameterError(
            f"Unknown configuration option(s): {', '.join(sorted(unknown))}"
        )
    return replace(DEFAULT_CONFIG, **overrides)
