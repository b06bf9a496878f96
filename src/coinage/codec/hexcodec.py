from __future__ import annotations

from coinage.codec.errors import CodecError

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def hexlify(data: bytes) -> str:
    """Return lowercase hex representation of $data, two characters per byte.

    Examples:
        >>> hexlify(bytes([0x0A, 0x02, 0xFF]))
        '0a02ff'
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"$data must be bytes-like, but provided value is: {data!r}")
    return bytes(data).hex()


def unhexlify(text: str) -> bytes:
    """Convert hex string back to bytes. Upper and lower case digits are accepted.

    Raises:
        CodecError: If $text has odd length or contains a non-hex character.
    """
    if not isinstance(text, str):
        raise TypeError(f"$text must be a string, but provided value is: {text!r}")

    if len(text) % 2 != 0:
        raise CodecError(f"Input to `unhexlify` must have even length, but length of $text is {len(text)}")

    # `bytes.fromhex` would silently skip whitespace
    invalid = [ch for ch in text if ch not in _HEX_DIGITS]
    if invalid:
        raise CodecError(f"Input to `unhexlify` contains non-hex character '{invalid[0]}': '{text}'")

    return bytes.fromhex(text)
