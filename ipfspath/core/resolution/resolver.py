"""
Path resolver.

Resolves content paths to the identifier of the node they name,
following links in the object graph where the path has any.

Accepted inputs:
 - <base58 string>
 - <base58 string>/link/to/another/planet
 - /ipfs/<base58 string>
 - ParsedPath values
 - multihash bytes or ContentIdentifier values
"""
import time
import logging
from typing import Any, Iterable, List, Optional

from ..codec import ContentIdentifier, IdentifierCodec, MultihashCodec
from ..exceptions import (
    BatchResolutionError,
    InvalidIdentifierError,
    InvalidPathError,
    OfflineError,
)
from ..graph import ObjectGraphAccessor
from ..logging import get_logger
from ..path import ParsedPath, PathParser
from .batch import Outcome, gather_outcomes, first_failure
from .config import ResolverConfig, ErrorPolicy
from .link_follower import LinkFollower
from .requests import (
    PathLike,
    ResolutionRequest,
    TextPath,
    StructuredPath,
    RawIdentifier,
    RejectedInput,
    classify_input,
)


class PathResolver:
    """
    Resolves one or many content paths against an object graph.

    Inputs of one call resolve concurrently and independently; results
    come back in input order. The graph is only read, never cached.

    Example:
        >>> resolver = PathResolver(graph)
        >>> ids = await resolver.resolve(['/ipfs/Qm.../docs', 'Qm...'])
    """

    def __init__(
        self,
        graph: Optional[ObjectGraphAccessor],
        config: Optional[ResolverConfig] = None,
        codec: Optional[IdentifierCodec] = None
    ):
        """
        Initialize resolver.

        Args:
            graph: Object graph accessor; None allows only paths without links
            config: Resolver configuration (uses defaults if not provided)
            codec: Identifier codec (multihash by default)
        """
        self._graph = graph
        self._config = config or ResolverConfig.default()
        self._codec = codec or MultihashCodec()
        self._parser = PathParser(self._codec, prefix=self._config.path_prefix)

        self._logger = get_logger('ipfspath.resolver')
        # Let an application-configured root logger decide the level
        if not logging.getLogger().handlers:
            self._logger.setLevel(self._config.log_level)

    @property
    def config(self) -> ResolverConfig:
        """Get current configuration."""
        return self._config

    def classify(self, value: Any) -> ResolutionRequest:
        """Classify one input."""
        return classify_input(value, self._codec)

    async def resolve_request(self, request: ResolutionRequest) -> ContentIdentifier:
        """
        Resolve one classified input.

        Raises:
            InvalidPathError: If the input is not a valid path
            LinkNotFoundError: If a link in the path does not exist
            OfflineError: If links must be followed but there is no graph
            Exception: Accessor errors, unchanged
        """
        if isinstance(request, RejectedInput):
            raise request.error

        if isinstance(request, RawIdentifier):
            return request.identifier

        if isinstance(request, TextPath):
            parsed = self._parser.parse(request.text)
        elif isinstance(request, StructuredPath):
            parsed = request.parsed
        else:
            raise TypeError(f"unknown resolution request: {request!r}")

        return await self._resolve_parsed(parsed)

    async def _resolve_parsed(self, parsed: ParsedPath) -> ContentIdentifier:
        root = self._decode_root(parsed)

        if parsed.is_root_only:
            return root

        if self._graph is None:
            raise OfflineError()

        follower = LinkFollower(
            self._graph,
            root,
            parsed.links,
            verify_terminal=self._config.verify_terminal
        )
        return await follower.run()

    def _decode_root(self, parsed: ParsedPath) -> ContentIdentifier:
        try:
            return parsed.root_identifier(self._codec)
        except InvalidIdentifierError as e:
            raise InvalidPathError(path=str(parsed)) from e

    async def resolve_outcomes(self, inputs: Iterable[PathLike]) -> List[Outcome]:
        """
        Resolve every input and report each outcome.

        Per-input failures are stored on the outcomes, never raised.

        Returns:
            One Outcome per input, in input order
        """
        requests = [self.classify(value) for value in self._as_list(inputs)]
        return await gather_outcomes(
            requests,
            self.resolve_request,
            limit=self._config.max_concurrency
        )

    async def resolve(self, inputs: Iterable[PathLike]) -> List[ContentIdentifier]:
        """
        Resolve a batch of paths.

        Args:
            inputs: Paths, in order

        Returns:
            Terminal node identifiers, in input order

        Raises:
            BatchResolutionError: If any input failed. Under GATHER_ALL it
                holds every failure; under FAIL_FAST only the first one
                to complete.
        """
        values = self._as_list(inputs)
        requests = [self.classify(value) for value in values]
        started = time.monotonic()

        if self._config.error_policy is ErrorPolicy.FAIL_FAST:
            outcomes = await first_failure(
                requests, self.resolve_request, limit=self._config.max_concurrency
            )
        else:
            outcomes = await gather_outcomes(
                requests, self.resolve_request, limit=self._config.max_concurrency
            )

        failures = {o.index: o.error for o in outcomes if not o.ok}
        # Fail-fast outcomes omit cancelled inputs
        resolved = sum(1 for o in outcomes if o.ok)
        elapsed = time.monotonic() - started
        self._logger.info(
            f"Resolved {resolved}/{len(values)} paths in {elapsed:.3f}s"
        )

        if failures:
            for index, error in failures.items():
                self._logger.warning(f"Path {values[index]!r} failed: {error}")

            results: List[Optional[ContentIdentifier]] = [None] * len(values)
            for outcome in outcomes:
                if outcome.ok:
                    results[outcome.index] = outcome.value
            raise BatchResolutionError(failures, results=results, inputs=values)

        return [outcome.value for outcome in outcomes]

    async def resolve_one(self, path: PathLike) -> ContentIdentifier:
        """
        Resolve a single path.

        Raises:
            The input's own error, unwrapped
        """
        return await self.resolve_request(self.classify(path))

    @staticmethod
    def _as_list(inputs: Iterable[PathLike]) -> List[Any]:
        if isinstance(inputs, (str, bytes, bytearray, ParsedPath, ContentIdentifier)):
            raise TypeError(
                "resolve() takes a collection of paths; use resolve_one() for a single path"
            )
        return list(inputs)


async def resolve_ipfs_paths(
    graph: Optional[ObjectGraphAccessor],
    inputs: Iterable[PathLike],
    config: Optional[ResolverConfig] = None
) -> List[ContentIdentifier]:
    """
    Resolve a batch of content paths to terminal node identifiers.

    Raises:
        BatchResolutionError: If any input failed
    """
    return await PathResolver(graph, config).resolve(inputs)


async def resolve_ipfs_path(
    graph: Optional[ObjectGraphAccessor],
    path: PathLike,
    config: Optional[ResolverConfig] = None
) -> ContentIdentifier:
    """Resolve one content path to its terminal node identifier."""
    return await PathResolver(graph, config).resolve_one(path)
