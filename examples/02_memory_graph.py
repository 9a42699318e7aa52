"""
Offline usage - Resolve against an in-memory graph
"""
import asyncio
import hashlib

from ipfspath import (
    ContentIdentifier,
    DAGLink,
    DAGNode,
    MemoryObjectGraph,
    ResolverConfig,
    resolve_ipfs_paths,
)


def make_id(seed: str) -> ContentIdentifier:
    digest = hashlib.sha256(seed.encode()).digest()
    return ContentIdentifier(bytes([0x12, 0x20]) + digest)


async def main():
    root, docs, page = make_id("root"), make_id("docs"), make_id("page")

    graph = MemoryObjectGraph()
    graph.add_nodes([
        DAGNode(root, links=[DAGLink("docs", docs)]),
        DAGNode(docs, links=[DAGLink("index.html", page)]),
        DAGNode(page, data=b"<html></html>"),
    ])

    results = await resolve_ipfs_paths(
        graph,
        [f"/ipfs/{root}/docs/index.html", f"{root}/docs", root],
        ResolverConfig.bounded(2),
    )
    for identifier in results:
        print(identifier)

    print(f"Fetched {graph.fetch_count} nodes")


if __name__ == "__main__":
    asyncio.run(main())
