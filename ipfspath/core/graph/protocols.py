"""
Object graph protocols.

Defines the interface the resolver consumes to read nodes from storage.
Implementations can use an HTTP API, a local blockstore, or memory.
"""
from typing import Protocol, runtime_checkable

from ..codec import ContentIdentifier
from .models import DAGNode


@runtime_checkable
class ObjectGraphAccessor(Protocol):
    """
    Protocol for read-only object graph access.

    The resolver shares one accessor across all concurrent fetches of a
    call and never mutates it.
    """

    async def get_node(self, identifier: ContentIdentifier) -> DAGNode:
        """
        Fetch a node by identifier.

        Args:
            identifier: Identifier of the node

        Returns:
            The node

        Raises:
            NodeNotFoundError: If the graph has no such node
            GraphTransportError: If the backend cannot be reached
        """
        ...
