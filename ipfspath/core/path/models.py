"""Parsed path model."""
from dataclasses import dataclass, field
from typing import Tuple, Optional

from ..codec import ContentIdentifier, IdentifierCodec, MultihashCodec
from ..exceptions import InvalidPathError

IPFS_PREFIX = '/ipfs/'


@dataclass(frozen=True)
class ParsedPath:
    """
    A content path broken into its root and link names.

    Examples:
        b58Hash -> ParsedPath(root='b58Hash', links=())
        /ipfs/b58Hash/mercury/venus -> ParsedPath(root='b58Hash', links=('mercury', 'venus'))
    """
    root: str
    links: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.links, tuple):
            object.__setattr__(self, 'links', tuple(self.links))

        # Link names are single non-empty path segments
        for link in self.links:
            if not isinstance(link, str) or not link or '/' in link:
                raise InvalidPathError(
                    f"invalid link name {link!r}", path=self.segments()
                )

    @property
    def is_root_only(self) -> bool:
        """True when the path names only its root."""
        return not self.links

    def root_identifier(self, codec: Optional[IdentifierCodec] = None) -> ContentIdentifier:
        """
        Decodes the root into its identifier.

        Raises:
            InvalidIdentifierError: If the root is not a valid identifier
        """
        return (codec or MultihashCodec()).decode_identifier(self.root)

    def segments(self) -> Tuple[str, ...]:
        """Root followed by link names."""
        return (self.root,) + self.links

    def __str__(self) -> str:
        return IPFS_PREFIX + '/'.join(self.segments())
