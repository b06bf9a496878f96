class CodecError(ValueError):
    """Input cannot be decoded (wrong length or character outside the alphabet)."""
