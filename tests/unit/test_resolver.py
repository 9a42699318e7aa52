"""Tests for the path resolver."""
import asyncio
import logging
from unittest.mock import AsyncMock

import pytest

from ipfspath import resolve_ipfs_paths, resolve_ipfs_path
from ipfspath.core.codec import ContentIdentifier, MultihashCodec
from ipfspath.core.exceptions import (
    BatchResolutionError,
    InvalidPathError,
    LinkNotFoundError,
    NodeNotFoundError,
    OfflineError,
    OFFLINE_ERROR,
)
from ipfspath.core.graph import DAGLink, DAGNode, MemoryObjectGraph
from ipfspath.core.path import ParsedPath
from ipfspath.core.resolution import (
    PathResolver,
    ResolverConfig,
    ErrorPolicy,
    TextPath,
    StructuredPath,
    RawIdentifier,
    RejectedInput,
    classify_input,
)


class TestClassifyInput:
    """Test suite for classify_input."""

    def test_text(self):
        assert classify_input('anything') == TextPath('anything')

    def test_parsed(self, known_b58):
        parsed = ParsedPath(known_b58, ('a',))

        assert classify_input(parsed) == StructuredPath(parsed)

    def test_identifier_trusted(self):
        """Test a ContentIdentifier is accepted even when empty."""
        empty = ContentIdentifier(b'')

        assert classify_input(empty) == RawIdentifier(empty)

    def test_valid_bytes(self, root_id):
        request = classify_input(bytes(root_id))

        assert request == RawIdentifier(root_id)

    def test_valid_bytearray(self, root_id):
        request = classify_input(bytearray(bytes(root_id)))

        assert request == RawIdentifier(root_id)

    def test_invalid_bytes(self):
        request = classify_input(b'\x00\x01')

        assert isinstance(request, RejectedInput)
        assert isinstance(request.error, InvalidPathError)

    def test_path_text_bytes_not_parsed(self, known_b58):
        """Test bytes are never parsed as text."""
        request = classify_input(known_b58.encode())

        assert isinstance(request, RejectedInput)

    @pytest.mark.parametrize('value', [None, 42, 3.5, object()])
    def test_unsupported_type(self, value):
        request = classify_input(value)

        assert isinstance(request, RejectedInput)
        assert 'unsupported path type' in str(request.error)


class TestPathResolverSingle:
    """Test suite for resolving single inputs."""

    @pytest.fixture
    def resolver(self, sample_graph):
        return PathResolver(sample_graph)

    @pytest.mark.asyncio
    async def test_root_only_no_fetch(self, resolver, sample_graph, root_id):
        """Test root-only paths never touch the graph."""
        for path in (str(root_id), f'/ipfs/{root_id}', f'{root_id}/'):
            assert await resolver.resolve_one(path) == root_id

        assert sample_graph.fetch_count == 0

    @pytest.mark.asyncio
    async def test_root_only_equals_decoded(self, known_b58):
        """Test resolving a bare identifier yields its decoding."""
        resolver = PathResolver(MemoryObjectGraph())

        result = await resolver.resolve_one(known_b58)

        assert result == MultihashCodec.decode_identifier(known_b58)

    @pytest.mark.asyncio
    async def test_follows_links(self, resolver, sample_graph, root_id, n1_id, n2_id):
        """Test root/a/b resolves to n2."""
        result = await resolver.resolve_one(f'{root_id}/a/b')

        assert result == n2_id
        assert sample_graph.fetched == [root_id, n1_id, n2_id]

    @pytest.mark.asyncio
    async def test_follows_links_without_terminal_fetch(self, sample_graph, root_id, n1_id, n2_id):
        """Test one fetch per link traversed."""
        resolver = PathResolver(sample_graph, ResolverConfig(verify_terminal=False))

        result = await resolver.resolve_one(f'/ipfs/{root_id}/a/b')

        assert result == n2_id
        assert sample_graph.fetched == [root_id, n1_id]

    @pytest.mark.asyncio
    async def test_missing_link(self, resolver, sample_graph, root_id, n1_id):
        """Test root/a/z fails naming z and n1."""
        with pytest.raises(LinkNotFoundError) as exc_info:
            await resolver.resolve_one(f'{root_id}/a/z')

        assert exc_info.value.link_name == 'z'
        assert exc_info.value.node_id == n1_id
        assert sample_graph.fetched == [root_id, n1_id]

    @pytest.mark.asyncio
    async def test_missing_node_passes_through(self, resolver, id_factory, root_id):
        """Test accessor not-found surfaces unchanged."""
        with pytest.raises(NodeNotFoundError):
            await resolver.resolve_one(f'{root_id}/a/c')

        with pytest.raises(NodeNotFoundError):
            await resolver.resolve_one(f"{id_factory('absent')}/x")

    @pytest.mark.asyncio
    async def test_invalid_path(self, resolver, sample_graph):
        with pytest.raises(InvalidPathError):
            await resolver.resolve_one('bad path')

        assert sample_graph.fetch_count == 0

    @pytest.mark.asyncio
    async def test_raw_bytes(self, resolver, sample_graph, n2_id):
        """Test raw identifier bytes resolve to themselves."""
        assert await resolver.resolve_one(bytes(n2_id)) == n2_id
        assert sample_graph.fetch_count == 0

    @pytest.mark.asyncio
    async def test_raw_identifier_not_in_graph(self, resolver, id_factory):
        """Test raw identifiers are not checked against the graph."""
        absent = id_factory('absent')

        assert await resolver.resolve_one(absent) == absent

    @pytest.mark.asyncio
    async def test_invalid_bytes_single_failure(self, resolver):
        """Test invalid raw bytes fail once, with no fallback result."""
        with pytest.raises(InvalidPathError):
            await resolver.resolve_one(b'\x12\x20short')

    @pytest.mark.asyncio
    async def test_structured_path(self, resolver, root_id, n1_id):
        parsed = ParsedPath(str(root_id), ('a',))

        assert await resolver.resolve_one(parsed) == n1_id

    @pytest.mark.asyncio
    async def test_structured_path_invalid_root(self, resolver):
        with pytest.raises(InvalidPathError):
            await resolver.resolve_one(ParsedPath('not0hash', ('a',)))

    @pytest.mark.asyncio
    async def test_structured_path_empty_link_name(self, root_id, n1_id):
        """Test an empty link name is rejected, not looked up."""
        graph = MemoryObjectGraph([DAGNode(root_id, links=(DAGLink('', n1_id),))])
        resolver = PathResolver(graph)

        with pytest.raises(InvalidPathError):
            await resolver.resolve_one(ParsedPath(str(root_id), ('',)))

        assert graph.fetch_count == 0

    @pytest.mark.asyncio
    async def test_duplicate_link_first_wins(self, root_id, n1_id, n2_id):
        graph = MemoryObjectGraph([
            DAGNode(root_id, links=(DAGLink('a', n2_id), DAGLink('a', n1_id))),
            DAGNode(n1_id),
            DAGNode(n2_id),
        ])

        assert await PathResolver(graph).resolve_one(f'{root_id}/a') == n2_id

    @pytest.mark.asyncio
    async def test_offline_root_only(self, root_id):
        """Test root-only paths resolve without a graph."""
        assert await PathResolver(None).resolve_one(f'/ipfs/{root_id}') == root_id

    @pytest.mark.asyncio
    async def test_offline_links(self, root_id):
        """Test link-following without a graph raises OfflineError."""
        with pytest.raises(OfflineError) as exc_info:
            await PathResolver(None).resolve_one(f'{root_id}/a')

        assert str(exc_info.value) == OFFLINE_ERROR

    @pytest.mark.asyncio
    async def test_custom_prefix(self, sample_graph, root_id, n1_id):
        resolver = PathResolver(sample_graph, ResolverConfig(path_prefix='/ipld/'))

        assert await resolver.resolve_one(f'/ipld/{root_id}/a') == n1_id


class TestPathResolverBatch:
    """Test suite for batch resolution."""

    @pytest.mark.asyncio
    async def test_results_in_input_order(self, sample_graph, root_id, n1_id, n2_id):
        resolver = PathResolver(sample_graph)

        results = await resolver.resolve([
            f'{root_id}/a/b',
            str(root_id),
            f'/ipfs/{root_id}/a',
            bytes(n2_id),
        ])

        assert results == [n2_id, root_id, n1_id, n2_id]

    @pytest.mark.asyncio
    async def test_empty_batch(self, sample_graph):
        assert await PathResolver(sample_graph).resolve([]) == []

    @pytest.mark.asyncio
    async def test_accepts_any_iterable(self, sample_graph, root_id, n1_id):
        paths = (p for p in [f'{root_id}/a', str(root_id)])

        assert await PathResolver(sample_graph).resolve(paths) == [n1_id, root_id]

    @pytest.mark.asyncio
    @pytest.mark.parametrize('single', ['Qm', b'\x12', ParsedPath('Qm')])
    async def test_rejects_single_value(self, sample_graph, single):
        """Test the batch API refuses a bare path."""
        with pytest.raises(TypeError):
            await PathResolver(sample_graph).resolve(single)

    @pytest.mark.asyncio
    async def test_gather_all_reports_every_failure(self, sample_graph, root_id, n2_id):
        """Test valid entries resolve while invalid ones fail independently."""
        inputs = [f'{root_id}/a/b', f'{root_id}/a/z', 'bad path']

        with pytest.raises(BatchResolutionError) as exc_info:
            await PathResolver(sample_graph).resolve(inputs)

        error = exc_info.value
        assert set(error.failures) == {1, 2}
        assert isinstance(error.failures[1], LinkNotFoundError)
        assert isinstance(error.failures[2], InvalidPathError)
        assert error.results == [n2_id, None, None]
        assert error.inputs == inputs
        assert error.__cause__ is error.failures[1]
        assert error.first_error is error.failures[1]
        assert "failed to resolve 2 paths" in str(error)
        assert "'bad path'" in str(error)

    @pytest.mark.asyncio
    async def test_resolve_outcomes(self, sample_graph, root_id, n2_id):
        """Test per-input outcomes without raising."""
        outcomes = await PathResolver(sample_graph).resolve_outcomes(
            [f'{root_id}/a/b', f'{root_id}/a/z', 'bad path']
        )

        assert outcomes[0].value == n2_id
        assert isinstance(outcomes[1].error, LinkNotFoundError)
        assert isinstance(outcomes[2].error, InvalidPathError)

    @pytest.mark.asyncio
    async def test_failure_does_not_delay_siblings(self, root_id, n1_id):
        """Test a slow failing input and a fast valid one resolve independently."""
        completed = []

        class SlowGraph(MemoryObjectGraph):
            async def get_node(self, identifier):
                if identifier == root_id:
                    await asyncio.sleep(0.05)
                node = await super().get_node(identifier)
                completed.append(identifier)
                return node

        graph = SlowGraph([
            DAGNode(root_id, links=(DAGLink('a', n1_id),)),
            DAGNode(n1_id, links=(DAGLink('x', root_id),)),
        ])

        outcomes = await PathResolver(graph).resolve_outcomes(
            [f'{root_id}/missing', f'{n1_id}/x/a']
        )

        assert isinstance(outcomes[0].error, LinkNotFoundError)
        assert outcomes[1].value == n1_id
        assert completed[0] == n1_id

    @pytest.mark.asyncio
    async def test_fail_fast(self, sample_graph, root_id):
        """Test the first failure rejects the call."""
        resolver = PathResolver(sample_graph, ResolverConfig.fail_fast())

        with pytest.raises(BatchResolutionError) as exc_info:
            await resolver.resolve([str(root_id), 'bad path', f'{root_id}/a/b'])

        assert list(exc_info.value.failures) == [1]
        assert isinstance(exc_info.value.failures[1], InvalidPathError)

    @pytest.mark.asyncio
    async def test_fail_fast_cancels_inflight(self, root_id, n1_id):
        """Test fail-fast abandons fetches still in flight."""
        cancelled = asyncio.Event()

        async def get_node(identifier):
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.set()
                raise

        graph = AsyncMock()
        graph.get_node.side_effect = get_node
        resolver = PathResolver(graph, ResolverConfig.fail_fast())

        with pytest.raises(BatchResolutionError):
            await resolver.resolve([f'{root_id}/a', 'bad path'])

        assert cancelled.is_set()

    @pytest.mark.asyncio
    async def test_fail_fast_success(self, sample_graph, root_id, n1_id):
        resolver = PathResolver(sample_graph, ResolverConfig.fail_fast())

        assert await resolver.resolve([f'{root_id}/a', str(root_id)]) == [n1_id, root_id]

    @pytest.mark.asyncio
    async def test_bounded_concurrency(self, root_id, n1_id):
        """Test max_concurrency caps resolutions in flight."""
        running = 0
        peak = 0
        node = DAGNode(root_id, links=(DAGLink('a', n1_id),))

        async def get_node(identifier):
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            await asyncio.sleep(0.01)
            running -= 1
            return node if identifier == root_id else DAGNode(identifier)

        graph = AsyncMock()
        graph.get_node.side_effect = get_node
        resolver = PathResolver(graph, ResolverConfig.bounded(2))

        results = await resolver.resolve([f'{root_id}/a'] * 6)

        assert results == [n1_id] * 6
        assert peak == 2

    @pytest.mark.asyncio
    async def test_logs_failures(self, sample_graph, caplog):
        """Test per-input failures are logged as warnings."""
        with caplog.at_level(logging.WARNING, logger='ipfspath.resolver'):
            with pytest.raises(BatchResolutionError):
                await PathResolver(sample_graph).resolve(['bad path'])

        assert any("'bad path' failed" in r.message for r in caplog.records)

    @pytest.mark.asyncio
    async def test_fail_fast_summary_counts_resolved_only(self, root_id, caplog):
        """Test cancelled inputs are not counted as resolved."""
        async def get_node(identifier):
            await asyncio.sleep(10)

        graph = AsyncMock()
        graph.get_node.side_effect = get_node
        resolver = PathResolver(graph, ResolverConfig.fail_fast())

        with caplog.at_level(logging.INFO, logger='ipfspath.resolver'):
            with pytest.raises(BatchResolutionError):
                await resolver.resolve(['bad path', f'{root_id}/a', f'{root_id}/a'])

        messages = [r.message for r in caplog.records]
        assert any(m.startswith('Resolved 0/3 paths') for m in messages)


class TestModuleFunctions:
    """Test suite for module-level helpers."""

    @pytest.mark.asyncio
    async def test_resolve_ipfs_paths(self, sample_graph, root_id, n2_id):
        assert await resolve_ipfs_paths(sample_graph, [f'{root_id}/a/b']) == [n2_id]

    @pytest.mark.asyncio
    async def test_resolve_ipfs_path(self, sample_graph, root_id, n1_id):
        assert await resolve_ipfs_path(sample_graph, f'/ipfs/{root_id}/a') == n1_id

    @pytest.mark.asyncio
    async def test_resolve_ipfs_path_unwrapped_error(self, sample_graph, root_id):
        with pytest.raises(LinkNotFoundError):
            await resolve_ipfs_path(sample_graph, f'{root_id}/nope')

    @pytest.mark.asyncio
    async def test_resolve_ipfs_paths_config(self, sample_graph, root_id):
        config = ResolverConfig(error_policy=ErrorPolicy.FAIL_FAST)

        with pytest.raises(BatchResolutionError):
            await resolve_ipfs_paths(sample_graph, ['bad path'], config)
