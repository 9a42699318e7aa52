"""
Link-following state machine.

Walks a sequence of link names from a root node, one fetch at a time::

    START -> FETCHING_NODE -> LINK_LOOKUP -> FETCHING_NODE ... -> DONE
                    |               |
                    +--> FAILED <---+
"""
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from ..codec import ContentIdentifier
from ..exceptions import LinkNotFoundError
from ..graph import DAGNode, ObjectGraphAccessor
from ..logging import get_logger

logger = get_logger('ipfspath.resolver.follow')


class ResolutionState(str, Enum):
    """States of a single link-following resolution."""
    START = 'start'
    FETCHING_NODE = 'fetching_node'
    LINK_LOOKUP = 'link_lookup'
    DONE = 'done'
    FAILED = 'failed'


TRANSITIONS = {
    ResolutionState.START: {ResolutionState.FETCHING_NODE, ResolutionState.DONE},
    ResolutionState.FETCHING_NODE: {ResolutionState.LINK_LOOKUP, ResolutionState.FAILED},
    ResolutionState.LINK_LOOKUP: {
        ResolutionState.FETCHING_NODE,
        ResolutionState.DONE,
        ResolutionState.FAILED,
    },
    ResolutionState.DONE: set(),
    ResolutionState.FAILED: set(),
}


class LinkFollower:
    """
    Follows named links from a root node to the terminal node.

    Fetches within one path are strictly sequential. Each node visited is
    fetched once: the root, every link target, and the terminal node whose
    own identifier is the result. With ``verify_terminal=False`` the
    terminal fetch is skipped and the last link's target is returned.

    A follower runs once; create a new one per resolution.
    """

    def __init__(
        self,
        graph: ObjectGraphAccessor,
        root: ContentIdentifier,
        links: Sequence[str],
        verify_terminal: bool = True
    ):
        """
        Initialize follower.

        Args:
            graph: Object graph to fetch nodes from
            root: Identifier of the node the walk starts at
            links: Link names to follow, in order
            verify_terminal: Fetch the terminal node for its identifier
        """
        self._graph = graph
        self._root = root
        self._links: Tuple[str, ...] = tuple(links)
        self._verify_terminal = verify_terminal

        self.state = ResolutionState.START
        self.history: List[ResolutionState] = [ResolutionState.START]
        self.fetch_count = 0
        self.result: Optional[ContentIdentifier] = None

    @property
    def is_finished(self) -> bool:
        return self.state in (ResolutionState.DONE, ResolutionState.FAILED)

    def _transition(self, state: ResolutionState):
        if state not in TRANSITIONS[self.state]:
            raise RuntimeError(f"invalid transition {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)

    async def _fetch(self, identifier: ContentIdentifier) -> DAGNode:
        self._transition(ResolutionState.FETCHING_NODE)
        self.fetch_count += 1
        try:
            node = await self._graph.get_node(identifier)
        except Exception:
            self._transition(ResolutionState.FAILED)
            raise
        self._transition(ResolutionState.LINK_LOOKUP)
        return node

    def _finish(self, identifier: ContentIdentifier) -> ContentIdentifier:
        self._transition(ResolutionState.DONE)
        self.result = identifier
        return identifier

    async def run(self) -> ContentIdentifier:
        """
        Walk the links.

        Returns:
            Identifier of the terminal node

        Raises:
            LinkNotFoundError: If a link name is absent from its node
            Exception: Any accessor error, unchanged
        """
        if self.state is not ResolutionState.START:
            raise RuntimeError("LinkFollower.run() may only be called once")

        if not self._links and not self._verify_terminal:
            return self._finish(self._root)

        current = self._root
        remaining = self._links

        while True:
            node = await self._fetch(current)

            if not remaining:
                logger.debug(f"Resolved {self._root} to {node.identifier}")
                return self._finish(node.identifier)

            name = remaining[0]
            link = node.find_link(name)
            if link is None:
                self._transition(ResolutionState.FAILED)
                raise LinkNotFoundError(name, node.identifier)

            logger.debug(f"Followed '{name}' under {node.identifier} to {link.target}")
            current = link.target
            remaining = remaining[1:]

            if not remaining and not self._verify_terminal:
                return self._finish(current)
