import pytest

from paillier.common.paillier import generate_keypair

TEST_KEY_BITS = 512


@pytest.fixture(scope="session")
def keypair():
    """One test-scale keypair shared by the whole run; keys are immutable."""
    return generate_keypair(TEST_KEY_BITS)


@pytest.fixture(scope="session")
def priv(keypair):
    return keypair[0]


@pytest.fixture(scope="session")
def pub(keypair):
    return keypair[1]
