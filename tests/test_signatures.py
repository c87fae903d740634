import pytest

from paillier.common.errors import MalformedInputError
from paillier.common.signatures import Signature, hash_to_int, sign, valid_signature


def test_hash_to_int():
    # sha256("1000")
    assert hash_to_int(1000) == int(
        "40510175845988f13f6162ed8526f0b09f73384467fa855e1e79b44a56562a58", 16
    )
    assert hash_to_int(1000) == hash_to_int("1000")
    assert hash_to_int("hello") != hash_to_int("hello ")


def test_valid_signature(priv, pub):
    sig = sign(priv, pub, 1000)
    assert valid_signature(pub, 1000, sig) is True


def test_signature_components_reduced(priv, pub):
    sig = sign(priv, pub, "a message")
    assert 0 <= sig.s1 < pub.n
    assert 0 <= sig.s2 < pub.n


def test_invalid_signature(priv, pub):
    sig = sign(priv, pub, 1000)
    assert valid_signature(pub, 666, sig) is False


def test_string_and_int_messages_agree(priv, pub):
    sig = sign(priv, pub, "1000")
    assert valid_signature(pub, 1000, sig)


def test_tampered_signature(priv, pub):
    sig = sign(priv, pub, "payload")
    assert not valid_signature(pub, "payload", Signature(sig.s1 + 1, sig.s2))
    assert not valid_signature(pub, "payload", Signature(sig.s1, sig.s2 + 1))


def test_signature_from_other_key(priv, pub):
    from paillier.common.paillier import generate_keypair

    other_priv, other_pub = generate_keypair(512)
    sig = sign(other_priv, other_pub, "payload")
    assert not valid_signature(pub, "payload", sig)


def test_signature_serialization(priv, pub):
    sig = sign(priv, pub, 1000)
    stringsig = sig.to_string()
    assert stringsig == f"{sig.s1},{sig.s2}"
    newsig = Signature.from_string(stringsig)
    assert newsig == sig
    assert valid_signature(pub, 1000, newsig)


@pytest.mark.parametrize("text", ["", "12", "1,2,3", "x,y", "1, "])
def test_signature_from_string_malformed(text):
    with pytest.raises(MalformedInputError):
        Signature.from_string(text)
