"""
Resolution request variants.

Every input to the resolver is classified exactly once, before any
processing, into one of:

- TextPath: path text still to be parsed
- StructuredPath: an already parsed path
- RawIdentifier: an identifier that resolves to itself
- RejectedInput: an input that can never resolve
"""
from dataclasses import dataclass
from typing import Any, Optional, Union

from ..codec import ContentIdentifier, IdentifierCodec, MultihashCodec
from ..exceptions import InvalidPathError
from ..path import ParsedPath


@dataclass(frozen=True)
class TextPath:
    """Path text, parsed during resolution."""
    text: str


@dataclass(frozen=True)
class StructuredPath:
    """Path already broken into root and links."""
    parsed: ParsedPath


@dataclass(frozen=True)
class RawIdentifier:
    """Identifier given directly; trusted as-is."""
    identifier: ContentIdentifier


@dataclass(frozen=True)
class RejectedInput:
    """Input refused at classification; carries its error."""
    value: Any
    error: InvalidPathError


ResolutionRequest = Union[TextPath, StructuredPath, RawIdentifier, RejectedInput]

PathLike = Union[str, bytes, bytearray, ContentIdentifier, ParsedPath]


def classify_input(
    value: Any,
    codec: Optional[IdentifierCodec] = None
) -> ResolutionRequest:
    """
    Classify one resolver input.

    Raw bytes are checked with the codec's byte validation and never parsed
    as text. A ContentIdentifier is accepted without any check.

    Args:
        value: Path text, raw identifier bytes, ContentIdentifier or ParsedPath
        codec: Identifier codec (multihash by default)

    Returns:
        The request variant for this input
    """
    codec = codec or MultihashCodec()

    if isinstance(value, str):
        return TextPath(value)

    if isinstance(value, ParsedPath):
        return StructuredPath(value)

    if isinstance(value, ContentIdentifier):
        return RawIdentifier(value)

    if isinstance(value, (bytes, bytearray)):
        if codec.is_valid_bytes(value):
            return RawIdentifier(ContentIdentifier(bytes(value)))
        return RejectedInput(
            value,
            InvalidPathError("invalid raw identifier", path=value)
        )

    return RejectedInput(
        value,
        InvalidPathError(
            f"unsupported path type: {type(value).__name__}",
            path=value
        )
    )
