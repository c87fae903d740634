"""Zero-knowledge proofs over Paillier ciphertexts."""
