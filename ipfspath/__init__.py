"""
ipfspath - Async Python library for resolving content paths.

Usage:
    >>> from ipfspath import HttpObjectGraph, resolve_ipfs_paths
    >>>
    >>> async with HttpObjectGraph() as graph:
    ...     ids = await resolve_ipfs_paths(graph, ['/ipfs/Qm.../docs/readme'])
"""
import logging

from .core.codec import ContentIdentifier, MultihashCodec, IdentifierCodec
from .core.exceptions import (
    OFFLINE_ERROR,
    IpfsPathException,
    InvalidIdentifierError,
    InvalidPathError,
    LinkNotFoundError,
    NodeNotFoundError,
    GraphTransportError,
    OfflineError,
    BatchResolutionError,
)
from .core.graph import (
    DAGLink,
    DAGNode,
    ObjectGraphAccessor,
    MemoryObjectGraph,
    HttpObjectGraph,
    GraphAPIConfig,
    TimeoutConfig,
)
from .core.path import ParsedPath, PathParser, parse_ipfs_path
from .core.resolution import (
    PathResolver,
    ResolverConfig,
    ErrorPolicy,
    Outcome,
    resolve_ipfs_paths,
    resolve_ipfs_path,
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for ipfspath modules.

    Sets the level on every ipfspath logger and keeps propagation on,
    so messages reach whatever handlers the application installed.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'ipfspath',
        'ipfspath.parser',
        'ipfspath.resolver',
        'ipfspath.resolver.follow',
        'ipfspath.graph',
        'ipfspath.graph.memory',
        'ipfspath.graph.http',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    # Parsing
    'ParsedPath',
    'PathParser',
    'parse_ipfs_path',

    # Resolution
    'PathResolver',
    'ResolverConfig',
    'ErrorPolicy',
    'Outcome',
    'resolve_ipfs_paths',
    'resolve_ipfs_path',

    # Identifiers
    'ContentIdentifier',
    'MultihashCodec',
    'IdentifierCodec',

    # Object graph
    'DAGLink',
    'DAGNode',
    'ObjectGraphAccessor',
    'MemoryObjectGraph',
    'HttpObjectGraph',
    'GraphAPIConfig',
    'TimeoutConfig',

    # Errors
    'OFFLINE_ERROR',
    'IpfsPathException',
    'InvalidIdentifierError',
    'InvalidPathError',
    'LinkNotFoundError',
    'NodeNotFoundError',
    'GraphTransportError',
    'OfflineError',
    'BatchResolutionError',

    'setup_logging',
]
