import pytest

from paillier.common.errors import MalformedInputError
from paillier.common.utils import join_ints, parse_int, parse_int_list
from paillier.zkp.hash import transcript_hash


def test_parse_int():
    assert parse_int("3") == 3
    assert parse_int(" 42\n") == 42
    assert parse_int("-17") == -17
    assert parse_int(str(2**4096)) == 2**4096


@pytest.mark.parametrize("text", ["", " ", "abc", "1_000", "12.5", "0x1f", "--1", "٣"])
def test_parse_int_malformed(text):
    with pytest.raises(MalformedInputError):
        parse_int(text)


def test_parse_int_requires_string():
    with pytest.raises(MalformedInputError):
        parse_int(3)


def test_int_lists():
    assert join_ints([1, 22, 333]) == "1,22,333"
    assert parse_int_list("1,22,333") == [1, 22, 333]
    assert parse_int_list("") == []
    assert parse_int_list("4;5", delimiter=";") == [4, 5]
    with pytest.raises(MalformedInputError):
        parse_int_list("1,2", expected=3)


def test_transcript_fields_are_delimited():
    assert transcript_hash(b"t", 1, 2) != transcript_hash(b"t", 258)
    assert transcript_hash(b"t", 1, 2) != transcript_hash(b"t", 2, 1)
    assert transcript_hash(b"t", 0, 1) != transcript_hash(b"t", 1)
    assert transcript_hash(b"t", 5) == transcript_hash(b"t", 5)
    assert transcript_hash(b"t") != transcript_hash(b"t", 0)


def test_transcript_tag_separates_protocols():
    assert transcript_hash(b"a", 1, 2) != transcript_hash(b"b", 1, 2)


def test_transcript_hash_range():
    assert 0 <= transcript_hash(b"t", 2**4096) < 2**256


def test_transcript_rejects_negative_values():
    with pytest.raises(ValueError):
        transcript_hash(b"t", -1)
