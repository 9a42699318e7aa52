"""
Content path parser.

Turns path text into a ParsedPath. Performs no I/O.

Accepted forms::

    <root>
    <root>/link/to/another/planet
    /ipfs/<root>
    /ipfs/<root>/link/
"""
import re
from typing import Any, Optional

from ..codec import IdentifierCodec, MultihashCodec
from ..exceptions import InvalidPathError
from ..logging import get_logger
from .models import ParsedPath, IPFS_PREFIX

logger = get_logger('ipfspath.parser')


class PathParser:
    """Parses content paths into root and link names."""

    def __init__(
        self,
        codec: Optional[IdentifierCodec] = None,
        prefix: str = IPFS_PREFIX
    ):
        """
        Initialize parser.

        Args:
            codec: Identifier codec used to validate the root
            prefix: Optional leading namespace marker stripped from paths
        """
        self._codec = codec or MultihashCodec()
        self._prefix = prefix
        self._pattern = self._compile(prefix)

    @property
    def prefix(self) -> str:
        return self._prefix

    @staticmethod
    def _compile(prefix: str) -> re.Pattern:
        optional_prefix = f"(?:{re.escape(prefix)})?" if prefix else ''
        return re.compile(rf"{optional_prefix}([^/]+(?:/[^/]+)*)/?")

    def parse(self, path: Any) -> ParsedPath:
        """
        Break a content path down into its root and links.

        Args:
            path: Path text

        Returns:
            ParsedPath with the root text and link names in order

        Raises:
            InvalidPathError: If the path is malformed or its root is not
                a valid identifier
        """
        if not isinstance(path, str):
            raise InvalidPathError(path=path)

        matched = self._pattern.fullmatch(path)
        if not matched:
            logger.debug(f"Path does not match grammar: {path!r}")
            raise InvalidPathError(path=path)

        root, *links = matched.group(1).split('/')

        if not self._codec.is_valid_text(root):
            logger.debug(f"Invalid root identifier in path: {path!r}")
            raise InvalidPathError(path=path)

        return ParsedPath(root=root, links=tuple(links))


_default_parser = PathParser()


def parse_ipfs_path(path: Any) -> ParsedPath:
    """
    Parse a content path with the default parser.

    Raises:
        InvalidPathError: If the path is invalid
    """
    return _default_parser.parse(path)
