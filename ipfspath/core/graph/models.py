"""Object graph domain models."""
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, Tuple, List

from ..codec import ContentIdentifier


@dataclass(frozen=True)
class DAGLink:
    """Named, immutable link from one node to another."""
    name: str
    target: ContentIdentifier
    size: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Converts link to dictionary."""
        return {
            'name': self.name,
            'target': str(self.target),
            'size': self.size,
        }


@dataclass(frozen=True)
class DAGNode:
    """
    One object in the graph.

    Read-only view: ordered outbound links plus the node's own identifier.
    """
    identifier: ContentIdentifier
    links: Tuple[DAGLink, ...] = field(default_factory=tuple)
    data: bytes = b''

    def __post_init__(self):
        if not isinstance(self.links, tuple):
            object.__setattr__(self, 'links', tuple(self.links))

    def find_link(self, name: str) -> Optional[DAGLink]:
        """Finds link by name. The first match in link order wins."""
        for link in self.links:
            if link.name == name:
                return link
        return None

    def link_names(self) -> List[str]:
        """Gets link names in link order."""
        return [link.name for link in self.links]

    def to_dict(self) -> Dict[str, Any]:
        """Converts node to dictionary."""
        return {
            'identifier': str(self.identifier),
            'links': [link.to_dict() for link in self.links],
            'size': len(self.data),
        }
