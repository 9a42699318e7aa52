"""
In-memory object graph implementation.

Provides a non-persistent graph for testing and embedding.
"""
from typing import Dict, Iterable, List, Optional

from ..codec import ContentIdentifier
from ..exceptions import NodeNotFoundError
from ..logging import get_logger
from .models import DAGNode
from .protocols import ObjectGraphAccessor


class MemoryObjectGraph(ObjectGraphAccessor):
    """
    In-memory object graph.

    Stores nodes in a dictionary keyed by identifier and records every
    fetch in ``fetched``.

    Useful for:
    - Unit testing
    - Resolving against graphs built in-process

    Example:
        >>> graph = MemoryObjectGraph()
        >>> graph.add_node(node)
        >>> fetched = await graph.get_node(node.identifier)
    """

    def __init__(self, nodes: Optional[Iterable[DAGNode]] = None):
        """
        Initialize memory graph.

        Args:
            nodes: Optional initial nodes
        """
        self._nodes: Dict[ContentIdentifier, DAGNode] = {}
        self.fetched: List[ContentIdentifier] = []
        self._logger = get_logger('ipfspath.graph.memory')
        if nodes:
            self.add_nodes(nodes)

    def add_node(self, node: DAGNode) -> DAGNode:
        """Adds node, replacing any node with the same identifier."""
        self._nodes[node.identifier] = node
        return node

    def add_nodes(self, nodes: Iterable[DAGNode]) -> None:
        """Adds several nodes."""
        for node in nodes:
            self.add_node(node)

    def remove_node(self, identifier: ContentIdentifier) -> None:
        """Removes node if present."""
        self._nodes.pop(identifier, None)

    async def get_node(self, identifier: ContentIdentifier) -> DAGNode:
        """
        Fetch node from memory.

        Raises:
            NodeNotFoundError: If the node was never added
        """
        self.fetched.append(identifier)
        node = self._nodes.get(identifier)
        if node is None:
            self._logger.debug(f"Node not found: {identifier}")
            raise NodeNotFoundError(identifier)
        return node

    @property
    def fetch_count(self) -> int:
        """Number of get_node calls so far."""
        return len(self.fetched)

    def __contains__(self, identifier: ContentIdentifier) -> bool:
        return identifier in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)
