"""
Resolver configuration module.

Controls fan-out, error policy and link-following behavior.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..path import IPFS_PREFIX


class ErrorPolicy(str, Enum):
    """How a batch call reports per-input failures."""
    GATHER_ALL = 'gather_all'  # wait for every input, report every failure
    FAIL_FAST = 'fail_fast'  # reject on the first failure, cancel the rest


@dataclass
class ResolverConfig:
    """
    Path resolver configuration.

    Defaults resolve every input concurrently and collect all failures.
    """
    # None means one task per input with no bound
    max_concurrency: Optional[int] = None

    error_policy: ErrorPolicy = ErrorPolicy.GATHER_ALL

    # Fetch the terminal node and return its own identifier
    verify_terminal: bool = True

    path_prefix: str = IPFS_PREFIX

    # Logging
    log_level: int = logging.INFO

    def __post_init__(self):
        if self.max_concurrency is not None and self.max_concurrency < 1:
            raise ValueError(
                f"max_concurrency must be >= 1 or None, got {self.max_concurrency}"
            )
        self.error_policy = ErrorPolicy(self.error_policy)

    @classmethod
    def default(cls) -> 'ResolverConfig':
        """Create default configuration."""
        return cls()

    @classmethod
    def fail_fast(cls, **kwargs) -> 'ResolverConfig':
        """Create configuration that rejects on the first failure."""
        return cls(error_policy=ErrorPolicy.FAIL_FAST, **kwargs)

    @classmethod
    def bounded(cls, max_concurrency: int, **kwargs) -> 'ResolverConfig':
        """Create configuration with bounded fan-out."""
        return cls(max_concurrency=max_concurrency, **kwargs)
