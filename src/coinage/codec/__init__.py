"""Stateless text codecs for binary data.

Independent from the monetary domain: nothing in `coinage.domain` imports this package.
"""

from coinage.codec.errors import CodecError

__all__ = ["CodecError"]
