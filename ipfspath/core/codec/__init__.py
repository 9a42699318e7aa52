"""Identifier codec module."""
from .identifier import ContentIdentifier
from .multihash import MultihashCodec, HASH_FUNCTIONS
from .protocols import IdentifierCodec

__all__ = [
    'ContentIdentifier',
    'MultihashCodec',
    'HASH_FUNCTIONS',
    'IdentifierCodec',
]
