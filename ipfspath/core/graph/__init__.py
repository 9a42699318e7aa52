"""Object graph module."""
from .models import DAGLink, DAGNode
from .protocols import ObjectGraphAccessor
from .memory_graph import MemoryObjectGraph
from .http_graph import HttpObjectGraph
from .config import GraphAPIConfig, TimeoutConfig

__all__ = [
    'DAGLink',
    'DAGNode',
    'ObjectGraphAccessor',
    'MemoryObjectGraph',
    'HttpObjectGraph',
    'GraphAPIConfig',
    'TimeoutConfig',
]
