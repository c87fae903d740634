"""
Fiat-Shamir transcript hashing for the proofs in this package.
"""

import hashlib


def _encode_field(value: int) -> bytes:
    # 4-byte length prefix keeps (1, 2) and (258,) apart; zero is an empty field.
    value = int(value)
    if value < 0:
        raise ValueError("Transcript values must be non-negative")
    body = value.to_bytes((value.bit_length() + 7) // 8, "big")
    return len(body).to_bytes(4, "big") + body


def transcript_hash(tag: bytes, *values: int) -> int:
    """
    Hashes an ordered transcript of non-negative integers under a protocol
    tag and returns the SHA-256 digest as an integer.

    The tag digest is absorbed first, so transcripts of different protocols
    never collide even when their values do.
    """
    h = hashlib.sha256(hashlib.sha256(tag).digest())
    h.update(len(values).to_bytes(4, "big"))
    for value in values:
        h.update(_encode_field(value))
    return int.from_bytes(h.digest(), "big")
