"""Pytest fixtures for ipfspath tests."""
import hashlib

import pytest

from ipfspath.core.codec import ContentIdentifier
from ipfspath.core.graph import DAGLink, DAGNode, MemoryObjectGraph


def make_id(seed: str) -> ContentIdentifier:
    """Builds a sha2-256 multihash identifier from a seed string."""
    digest = hashlib.sha256(seed.encode()).digest()
    return ContentIdentifier(bytes([0x12, len(digest)]) + digest)


@pytest.fixture
def id_factory():
    """Returns the identifier factory."""
    return make_id


@pytest.fixture
def root_id():
    return make_id('root')


@pytest.fixture
def n1_id():
    return make_id('n1')


@pytest.fixture
def n2_id():
    return make_id('n2')


@pytest.fixture
def sample_graph(root_id, n1_id, n2_id):
    """
    Returns a graph shaped root -{a}-> n1 -{b}-> n2.

    n1 also carries a link 'c' whose target is missing from the graph.
    """
    return MemoryObjectGraph([
        DAGNode(root_id, links=(DAGLink('a', n1_id, 10),)),
        DAGNode(n1_id, links=(
            DAGLink('b', n2_id, 5),
            DAGLink('c', make_id('missing'), 1),
        )),
        DAGNode(n2_id, data=b'leaf'),
    ])


@pytest.fixture
def known_b58():
    """A well-known sha2-256 multihash in base58."""
    return 'QmYwAPJzv5CZsnA625s3Xf2nemtYgPpHdWEz79ojWnPbdG'
