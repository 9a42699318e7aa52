"""
HTTP object graph accessor.

Reads nodes from an IPFS-compatible HTTP API via ``object/get``.
"""
import json
import base64
import asyncio
import binascii
from typing import Dict, Any, Optional
import aiohttp

from ..codec import ContentIdentifier, MultihashCodec
from ..exceptions import NodeNotFoundError, GraphTransportError, InvalidIdentifierError
from ..logging import get_logger
from .config import GraphAPIConfig
from .models import DAGLink, DAGNode
from .protocols import ObjectGraphAccessor


class HttpObjectGraph(ObjectGraphAccessor):
    """
    Object graph backed by an HTTP API.

    No retries are performed here; callers decide whether a
    GraphTransportError is worth another attempt.

    Example:
        >>> async with HttpObjectGraph() as graph:
        ...     node = await graph.get_node(identifier)
    """

    def __init__(
        self,
        config: Optional[GraphAPIConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize HTTP graph.

        Args:
            config: API configuration (uses defaults if not provided)
            session: Existing session to use; it is not closed by close()
        """
        self._config = config or GraphAPIConfig.default()
        self._session = session
        self._owns_session = session is None
        self._codec = MultihashCodec()
        self._logger = get_logger('ipfspath.graph.http')

    @property
    def config(self) -> GraphAPIConfig:
        """Get current configuration."""
        return self._config

    async def __aenter__(self) -> 'HttpObjectGraph':
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(**self._config.get_connector_kwargs())
            self._session = aiohttp.ClientSession(
                connector=connector,
                **self._config.get_session_kwargs()
            )
            self._owns_session = True
        return self._session

    async def close(self):
        """Close the session if this graph created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def get_node(self, identifier: ContentIdentifier) -> DAGNode:
        """
        Fetch node over HTTP.

        Raises:
            NodeNotFoundError: If the API reports the node as missing
            GraphTransportError: On connection, HTTP or decoding failures
        """
        session = await self._ensure_session()
        url = self._config.object_get_url()
        params = {'arg': str(identifier), 'data-encoding': 'base64'}

        self._logger.debug(f"object/get {identifier}")

        try:
            async with session.post(url, params=params) as response:
                status = response.status
                body = await response.text()
        except asyncio.TimeoutError as e:
            raise GraphTransportError(f"timed out fetching {identifier}") from e
        except aiohttp.ClientError as e:
            raise GraphTransportError(f"failed to fetch {identifier}: {e}") from e

        if status >= 400:
            message = self._error_message(body)
            if 'not found' in message.lower():
                raise NodeNotFoundError(identifier, message)
            raise GraphTransportError(
                f"object/get {identifier} failed with HTTP {status}: {message}",
                status=status
            )

        return self._parse_node(identifier, body)

    def _parse_node(self, identifier: ContentIdentifier, body: str) -> DAGNode:
        """Builds a node from an object/get JSON body."""
        try:
            payload = json.loads(body)
            links = tuple(self._parse_link(raw) for raw in payload.get('Links') or [])
            data = base64.b64decode(payload.get('Data') or '')
        except (ValueError, TypeError, KeyError, AttributeError, binascii.Error) as e:
            raise GraphTransportError(f"malformed node response for {identifier}") from e

        return DAGNode(identifier=identifier, links=links, data=data)

    def _parse_link(self, raw: Dict[str, Any]) -> DAGLink:
        try:
            target = self._codec.decode_identifier(raw['Hash'])
        except InvalidIdentifierError as e:
            raise ValueError(f"invalid link hash: {raw.get('Hash')!r}") from e
        return DAGLink(
            name=raw.get('Name', ''),
            target=target,
            size=int(raw.get('Size', 0))
        )

    @staticmethod
    def _error_message(body: str) -> str:
        """Extracts the API error message from a failure body."""
        try:
            payload = json.loads(body)
        except ValueError:
            return body.strip()
        if isinstance(payload, dict) and payload.get('Message'):
            return str(payload['Message'])
        return body.strip()
