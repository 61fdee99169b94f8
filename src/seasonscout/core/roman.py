"""Roman numeral decoding for ``Part IV`` style episode markers."""

_ROMAN_VALUES = {
    "M": 1000,
    "D": 500,
    "C": 100,
    "L": 50,
    "X": 10,
    "V": 5,
    "I": 1,
}


def _decode_single_roman(letter: str) -> int:
    return _ROMAN_VALUES.get(letter, 0)


def decode_roman(token: str) -> int:
    """Decode a subtractive-notation roman numeral, e.g. ``"IX"`` -> 9.

    Matching is case-insensitive. Malformed sequences are not rejected: ``IIII``
    decodes to 4 and unknown letters count as zero, so callers always get *some*
    integer back. An empty token decodes to 0.
    """
    if not token:
        return 0

    upper = token.upper()
    result = 0
    # every symbol but the last is subtracted when followed by a larger one
    for current, following in zip(upper, upper[1:]):
        value = _decode_single_roman(current)
        if value < _decode_single_roman(following):
            result -= value
        else:
            result += value
    return result + _decode_single_roman(upper[-1])
