"""
Protocol definitions for identifier codecs.

Lets the parser and resolver work with any identifier scheme.
"""
from typing import Protocol, Union, runtime_checkable

from .identifier import ContentIdentifier


@runtime_checkable
class IdentifierCodec(Protocol):
    """Protocol for identifier codecs."""

    def is_valid_text(self, text: str) -> bool:
        """
        Check a textual identifier.

        Args:
            text: Identifier in its text encoding

        Returns:
            True if text names a valid identifier
        """
        ...

    def decode_identifier(self, text: str) -> ContentIdentifier:
        """
        Decode a textual identifier.

        Raises:
            InvalidIdentifierError: If the text is malformed
        """
        ...

    def is_valid_bytes(self, raw: Union[bytes, bytearray]) -> bool:
        """Check already-binary identifier bytes without text parsing."""
        ...
