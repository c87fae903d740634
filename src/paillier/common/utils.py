from typing import Iterable, List, Optional

from paillier.common.errors import MalformedInputError

INT_LIST_DELIMITER = ","


def parse_int(text: str) -> int:
    """Parses the canonical decimal representation of an integer.

    This is the only place where textual input is turned into the integers
    the cryptosystem operates on. Leading and trailing whitespace is ignored;
    anything else that is not an optionally signed run of ASCII digits is
    rejected.

    Args:
        text: The decimal string to parse.

    Returns:
        The parsed integer.
    """
    if not isinstance(text, str):
        raise MalformedInputError(f"Expected a decimal string, got {type(text).__name__}")
    stripped = text.strip()
    digits = stripped[1:] if stripped[:1] in ("-", "+") else stripped
    if not digits or not (digits.isascii() and digits.isdigit()):
        raise MalformedInputError(f"Not a decimal integer: {text!r}")
    return int(stripped, 10)


def parse_int_list(
    text: str, expected: Optional[int] = None, delimiter: str = INT_LIST_DELIMITER
) -> List[int]:
    """Parses a delimiter-separated list of decimal integers.

    This is the inverse operation of join_ints. An empty string decodes to an
    empty list.

    Args:
        text: The serialized list.
        expected: If given, the exact number of integers required.
        delimiter: The separator between integers.

    Returns:
        The list of parsed integers.
    """
    if not isinstance(text, str):
        raise MalformedInputError(f"Expected a string, got {type(text).__name__}")
    values = [parse_int(part) for part in text.split(delimiter)] if text else []
    if expected is not None and len(values) != expected:
        raise MalformedInputError(
            f"Expected {expected} integers, got {len(values)}: {text!r}"
        )
    return values


def join_ints(values: Iterable[int], delimiter: str = INT_LIST_DELIMITER) -> str:
    """Converts a sequence of integers into a delimiter-separated decimal string."""
    return delimiter.join(str(int(v)) for v in values)
