"""Base-16 codec with an alphabet that is easy to read aloud and hard to misread.

Letters that look alike (B/8, I/1, O/0, S/5, ...) are left out. Nibble values
0..15 map to `ACEFHKLNPRTXY457` in this order.
"""

from __future__ import annotations

from coinage.codec.errors import CodecError

ALPHABET = "ACEFHKLNPRTXY457"

# Lookup table indexed by `ord(ch) - ord("4")`, covering '4'..'Y'; None marks invalid characters
_LOW_BOUND = ord("4")
_SYMBOL_TO_NIBBLE: list[int | None] = [None] * (ord("Y") - _LOW_BOUND + 1)
for _nibble, _symbol in enumerate(ALPHABET):
    _SYMBOL_TO_NIBBLE[ord(_symbol) - _LOW_BOUND] = _nibble

_ALPHABET_SET = frozenset(ALPHABET)


def normalize(text: str) -> str:
    """Prepare $text for decoding: upper-case it and drop every character outside the alphabet.

    Examples:
        >>> normalize("ac-ef 4x")
        'ACEF4X'
    """
    return "".join(ch for ch in text.upper() if ch in _ALPHABET_SET)


def encode(data: bytes | None) -> str | None:
    """Encode $data, high nibble first. Returns None for None."""
    if data is None:
        return None

    return "".join(ALPHABET[b >> 4] + ALPHABET[b & 0x0F] for b in bytes(data))


def _nibble_of(symbol: str, text: str) -> int:
    index = ord(symbol) - _LOW_BOUND
    nibble = _SYMBOL_TO_NIBBLE[index] if 0 <= index < len(_SYMBOL_TO_NIBBLE) else None
    if nibble is None:
        raise CodecError(f"Base16pcos decode ran into an invalid character '{symbol}': '{text}'")
    return nibble


def decode(text: str | None, clean_up: bool = False) -> bytes | None:
    """Decode Base16pcos $text into bytes. Returns None for None.

    Args:
        text: Encoded text.
        clean_up: When True, `normalize` $text first.

    Raises:
        CodecError: If $text has odd length or contains a character outside the alphabet.
    """
    if text is None:
        return None

    if clean_up:
        text = normalize(text)

    if len(text) % 2 != 0:
        raise CodecError(f"Base16pcos decode input must be even-length: '{text}'")

    return bytes((_nibble_of(text[i], text) << 4) | _nibble_of(text[i + 1], text) for i in range(0, len(text), 2))
