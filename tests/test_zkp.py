import pytest

from paillier.common.errors import InvalidParameterError, MalformedInputError
from paillier.common.paillier import decrypt, encrypt, r_encrypt
from paillier.config import get_config
from paillier.zkp.membership import (
    ProofMembership,
    ZKPCommit,
    challenge_bits,
    verify_zkp,
)

VALID_MS = [1, 2, 3, 4, 5]
INVALID_MS = [1, 2, 3, 5, 6]
MY_M = 4


@pytest.fixture(scope="module")
def proof(pub):
    return ProofMembership.new_proof(pub, MY_M, VALID_MS)


def test_zkp(priv, pub, proof):
    e_my_m = proof.ciphertext
    assert decrypt(priv, pub, e_my_m) == MY_M

    # if the set of acceptable messages includes our message, this should return true
    assert verify_zkp(pub, e_my_m, VALID_MS, proof.commitment) is True
    # if the set of acceptable messages does not include the message, this should return false
    assert verify_zkp(pub, e_my_m, INVALID_MS, proof.commitment) is False


def test_cannot_prove_message_outside_set(pub):
    with pytest.raises(InvalidParameterError):
        ProofMembership.new_proof(pub, 7, VALID_MS)
    with pytest.raises(ValueError):
        ProofMembership.new_proof(pub, 1, [])


def test_duplicate_candidates_rejected(pub):
    with pytest.raises(InvalidParameterError):
        ProofMembership.new_proof(pub, 1, [1, 2, 2])


def test_proof_verify_method(pub, proof):
    assert proof.verify(pub, VALID_MS)
    assert not proof.verify(pub, INVALID_MS)


def test_candidate_order_matters(pub, proof):
    assert not verify_zkp(pub, proof.ciphertext, list(reversed(VALID_MS)), proof.commitment)


def test_other_candidate_set_containing_message(pub, proof):
    assert not verify_zkp(pub, proof.ciphertext, [0, 2, 3, 4, 5], proof.commitment)


def test_commitment_bound_to_ciphertext(pub, proof):
    other = encrypt(pub, MY_M)
    assert not verify_zkp(pub, other, VALID_MS, proof.commitment)


def test_commitment_bound_to_key(pub, proof):
    from paillier.common.paillier import generate_keypair

    _, other_pub = generate_keypair(512)
    assert not verify_zkp(other_pub, proof.ciphertext, VALID_MS, proof.commitment)


def test_tampered_commitment(pub, proof):
    c = proof.commitment
    t = challenge_bits(pub)

    swapped_e = ZKPCommit(c.A, [c.E[1], c.E[0]] + c.E[2:], c.Z)
    assert not verify_zkp(pub, proof.ciphertext, VALID_MS, swapped_e)

    bumped_z = ZKPCommit(c.A, c.E, [c.Z[0] + 1] + c.Z[1:])
    assert not verify_zkp(pub, proof.ciphertext, VALID_MS, bumped_z)

    out_of_range_e = ZKPCommit(c.A, [c.E[0] + 2**t] + c.E[1:], c.Z)
    assert not verify_zkp(pub, proof.ciphertext, VALID_MS, out_of_range_e)

    truncated = ZKPCommit(c.A[:-1], c.E[:-1], c.Z[:-1])
    assert not verify_zkp(pub, proof.ciphertext, VALID_MS, truncated)


def test_verify_rejects_non_commitment(pub, proof):
    assert not verify_zkp(pub, proof.ciphertext, VALID_MS, proof.commitment.to_string())
    assert not verify_zkp(pub, proof.ciphertext, VALID_MS, None)


def test_proof_for_every_member(pub):
    for m in VALID_MS:
        p = ProofMembership.new_proof(pub, m, VALID_MS)
        assert verify_zkp(pub, p.ciphertext, VALID_MS, p.commitment)


def test_single_candidate(pub):
    p = ProofMembership.new_proof(pub, 0, [0])
    assert verify_zkp(pub, p.ciphertext, [0], p.commitment)
    assert not verify_zkp(pub, p.ciphertext, [1], p.commitment)


def test_negative_and_large_candidates(priv, pub):
    candidates = [-1, 0, 1, 2**100]
    p = ProofMembership.new_proof(pub, -1, candidates)
    assert decrypt(priv, pub, p.ciphertext) == pub.n - 1
    assert verify_zkp(pub, p.ciphertext, candidates, p.commitment)


def test_proof_for_existing_ciphertext(pub):
    r, c = r_encrypt(pub, 3)
    p = ProofMembership.new_proof_with_randomness(pub, c, r, 3, VALID_MS)
    assert p.ciphertext == c
    assert verify_zkp(pub, c, VALID_MS, p.commitment)


def test_proof_for_existing_ciphertext_wrong_randomness(pub):
    r, c = r_encrypt(pub, 3)
    other_r, _ = r_encrypt(pub, 3)
    with pytest.raises(InvalidParameterError):
        ProofMembership.new_proof_with_randomness(pub, c, other_r, 3, VALID_MS)
    with pytest.raises(InvalidParameterError):
        ProofMembership.new_proof_with_randomness(pub, c, r, 2, VALID_MS)


def test_serialization(pub, proof):
    commitment_string = proof.commitment.to_string()
    copy = ZKPCommit.from_string(commitment_string)
    assert proof.commitment == copy
    assert copy.to_string() == commitment_string
    assert str(copy) == commitment_string
    assert verify_zkp(pub, proof.ciphertext, VALID_MS, copy)


@pytest.mark.parametrize(
    "text", ["", "1,2;3,4", "1;2;3;4", "1,2;3;4,5", "a;b;c", "1;;2"]
)
def test_serialization_malformed(text):
    with pytest.raises(MalformedInputError):
        ZKPCommit.from_string(text)


def test_challenge_bits_from_config(pub):
    assert challenge_bits(pub) == min(256, pub.n.bit_length() // 2 - 1)
    assert challenge_bits(pub, get_config(challenge_bits=8)) == 8


def test_proof_with_narrow_challenges(pub):
    config = get_config(challenge_bits=8)
    proof = ProofMembership.new_proof(pub, 2, VALID_MS, config)
    assert all(0 <= e < 2**8 for e in proof.commitment.E)
    assert proof.verify(pub, VALID_MS, config)
    assert verify_zkp(pub, proof.ciphertext, VALID_MS, proof.commitment, config)
    # The default width recomputes a different challenge.
    assert not verify_zkp(pub, proof.ciphertext, VALID_MS, proof.commitment)
