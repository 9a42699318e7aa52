"""
Multihash codec.

Validates raw multihash bytes and converts between the raw form and the
base58 text form used in content paths.

A multihash is laid out as::

    <function code: 1 byte><digest length: 1 byte><digest>
"""
from typing import Dict, Union

import base58

from ..exceptions import InvalidIdentifierError
from .identifier import ContentIdentifier


HASH_FUNCTIONS: Dict[int, str] = {
    0x11: 'sha1',
    0x12: 'sha2-256',
    0x13: 'sha2-512',
    0x14: 'sha3-512',
    0x15: 'sha3-384',
    0x16: 'sha3-256',
    0x17: 'sha3-224',
    0x18: 'shake-128',
    0x19: 'shake-256',
    0x1a: 'keccak-224',
    0x1b: 'keccak-256',
    0x1c: 'keccak-384',
    0x1d: 'keccak-512',
    0x22: 'murmur3-128',
    0x23: 'murmur3-32',
}

MIN_LENGTH = 3
MAX_LENGTH = 129

# b58decode strips surrounding whitespace itself, so check characters first
B58_ALPHABET = frozenset(base58.BITCOIN_ALPHABET.decode('ascii'))


def is_app_code(code: int) -> bool:
    """Checks if code lies in the application-specific range."""
    return 0 < code < 0x10


def is_valid_code(code: int) -> bool:
    """Checks if code names a known or application-specific function."""
    return is_app_code(code) or code in HASH_FUNCTIONS


class MultihashCodec:
    """Multihash validation and base58 text encoding."""

    @staticmethod
    def validate(raw: Union[bytes, bytearray]) -> None:
        """
        Validates raw multihash bytes.

        Raises:
            InvalidIdentifierError: If the bytes are not a valid multihash
        """
        if not isinstance(raw, (bytes, bytearray)):
            raise InvalidIdentifierError("multihash must be bytes")

        if len(raw) < MIN_LENGTH:
            raise InvalidIdentifierError(
                f"multihash too short. must be >= {MIN_LENGTH} bytes"
            )

        if len(raw) > MAX_LENGTH:
            raise InvalidIdentifierError(
                f"multihash too long. must be <= {MAX_LENGTH} bytes"
            )

        code = raw[0]
        if not is_valid_code(code):
            raise InvalidIdentifierError(
                f"multihash unknown function code: 0x{code:02x}"
            )

        length = raw[1]
        if length < 1:
            raise InvalidIdentifierError(f"multihash invalid length: {length}")

        if len(raw) - 2 != length:
            raise InvalidIdentifierError(
                f"multihash length inconsistent: declared {length}, "
                f"digest has {len(raw) - 2} bytes"
            )

    @classmethod
    def is_valid_bytes(cls, raw: Union[bytes, bytearray]) -> bool:
        """Checks raw bytes without raising."""
        try:
            cls.validate(raw)
        except InvalidIdentifierError:
            return False
        return True

    @staticmethod
    def decode_text(text: str) -> bytes:
        """
        Decodes base58 text to raw bytes.

        Raises:
            InvalidIdentifierError: If text is not valid base58
        """
        if not isinstance(text, str):
            raise InvalidIdentifierError("identifier text must be a string")
        if not set(text) <= B58_ALPHABET:
            raise InvalidIdentifierError(f"invalid base58 identifier: {text!r}")
        try:
            return base58.b58decode(text)
        except ValueError as e:
            raise InvalidIdentifierError(f"invalid base58 identifier: {text!r}") from e

    @staticmethod
    def encode_text(raw: Union[bytes, bytearray]) -> str:
        """Encodes raw bytes to base58 text."""
        return base58.b58encode(bytes(raw)).decode('ascii')

    @classmethod
    def is_valid_text(cls, text: str) -> bool:
        """Checks that text is non-empty base58 of a valid multihash."""
        if not text or not isinstance(text, str):
            return False
        try:
            cls.validate(cls.decode_text(text))
        except InvalidIdentifierError:
            return False
        return True

    @classmethod
    def decode_identifier(cls, text: str) -> ContentIdentifier:
        """
        Decodes and validates a base58 identifier.

        Raises:
            InvalidIdentifierError: If the text is malformed
        """
        raw = cls.decode_text(text)
        cls.validate(raw)
        return ContentIdentifier(raw)

    @classmethod
    def function_name(cls, raw: Union[bytes, bytearray]) -> str:
        """Returns the hash function name of a valid multihash."""
        cls.validate(raw)
        code = raw[0]
        if is_app_code(code):
            return f'app-0x{code:02x}'
        return HASH_FUNCTIONS[code]
