"""Number theory, the Paillier cryptosystem and its signature scheme."""
