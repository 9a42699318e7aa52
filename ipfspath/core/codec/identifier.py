"""Content identifier value object."""
from dataclasses import dataclass

import base58


@dataclass(frozen=True)
class ContentIdentifier:
    """
    Opaque, self-describing hash naming a node in the object graph.

    Wraps the raw multihash bytes. Two identifiers are equal when their
    bytes are equal. The text form is base58.
    """
    multihash: bytes

    def __post_init__(self):
        if isinstance(self.multihash, bytearray):
            object.__setattr__(self, 'multihash', bytes(self.multihash))
        if not isinstance(self.multihash, bytes):
            raise TypeError(
                f"multihash must be bytes, got {type(self.multihash).__name__}"
            )

    def to_b58(self) -> str:
        """Returns the base58 text encoding."""
        return base58.b58encode(self.multihash).decode('ascii')

    def __bytes__(self) -> bytes:
        return self.multihash

    def __len__(self) -> int:
        return len(self.multihash)

    def __str__(self) -> str:
        return self.to_b58()

    def __repr__(self) -> str:
        return f"ContentIdentifier('{self.to_b58()}')"
