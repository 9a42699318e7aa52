"""Path resolution module."""
from .batch import Outcome, gather_outcomes, first_failure
from .config import ResolverConfig, ErrorPolicy
from .link_follower import LinkFollower, ResolutionState
from .requests import (
    TextPath,
    StructuredPath,
    RawIdentifier,
    RejectedInput,
    ResolutionRequest,
    PathLike,
    classify_input,
)
from .resolver import PathResolver, resolve_ipfs_paths, resolve_ipfs_path

__all__ = [
    # Resolver
    'PathResolver',
    'resolve_ipfs_paths',
    'resolve_ipfs_path',

    # Configuration
    'ResolverConfig',
    'ErrorPolicy',

    # Link-following
    'LinkFollower',
    'ResolutionState',

    # Batch combinator
    'Outcome',
    'gather_outcomes',
    'first_failure',

    # Requests
    'TextPath',
    'StructuredPath',
    'RawIdentifier',
    'RejectedInput',
    'ResolutionRequest',
    'PathLike',
    'classify_input',
]
