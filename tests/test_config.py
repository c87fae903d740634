import pytest

from paillier.common.errors import InvalidParameterError
from paillier.config import DEFAULT_CONFIG, PaillierConfig, get_config


def test_defaults():
    assert DEFAULT_CONFIG.key_bits == 2048
    assert DEFAULT_CONFIG.prime_rounds == 50
    assert DEFAULT_CONFIG.min_prime_bits == 8
    assert DEFAULT_CONFIG.coprime_test_threshold_bits == 1024


def test_get_config_overrides():
    config = get_config(key_bits=1024, challenge_bits=128)
    assert isinstance(config, PaillierConfig)
    assert config.key_bits == 1024
    assert config.challenge_bits == 128
    assert DEFAULT_CONFIG.key_bits == 2048


def test_get_config_unknown_option():
    with pytest.raises(InvalidParameterError):
        get_config(key_size=1024)
