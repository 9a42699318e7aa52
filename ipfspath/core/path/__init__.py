"""Content path parsing."""
from .models import ParsedPath, IPFS_PREFIX
from .parser import PathParser, parse_ipfs_path

__all__ = [
    'ParsedPath',
    'IPFS_PREFIX',
    'PathParser',
    'parse_ipfs_path',
]
