"""
Object graph API configuration module.

Provides configuration for the HTTP object graph accessor.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any


@dataclass
class TimeoutConfig:
    """
    Timeout configuration.

    Timeout policy belongs to the transport, not to path resolution.
    """
    total: float = 60.0  # Total request timeout
    connect: float = 10.0  # Connection timeout
    sock_read: float = 30.0  # Socket read timeout

    def to_aiohttp_timeout(self):
        """Convert to aiohttp ClientTimeout."""
        import aiohttp
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read
        )


@dataclass
class GraphAPIConfig:
    """
    HTTP object graph configuration.

    Points at an IPFS-compatible HTTP API, e.g. a local daemon.
    """
    # API root, with trailing slash
    api_url: str = 'http://127.0.0.1:5001/'

    user_agent: str = 'ipfspath/1.0.0'

    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)

    extra_headers: Dict[str, str] = field(default_factory=dict)

    # Connection pool settings
    limit_per_host: int = 10
    limit: int = 100

    def __post_init__(self):
        if not self.api_url.endswith('/'):
            self.api_url += '/'

    @classmethod
    def default(cls) -> 'GraphAPIConfig':
        """Create default configuration."""
        return cls()

    @classmethod
    def for_url(cls, api_url: str, **kwargs) -> 'GraphAPIConfig':
        """Create configuration for a given API root."""
        return cls(api_url=api_url, **kwargs)

    def object_get_url(self) -> str:
        """URL of the object/get command."""
        return f"{self.api_url}api/v0/object/get"

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {
            'limit': self.limit,
            'limit_per_host': self.limit_per_host,
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        headers = {
            'User-Agent': self.user_agent,
            **self.extra_headers
        }

        return {
            'headers': headers,
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
