"""
Basic usage - Resolve paths against a local node
"""
import asyncio
from ipfspath import HttpObjectGraph, PathResolver, BatchResolutionError


async def main():
    # Talks to the node API at http://127.0.0.1:5001/ by default
    async with HttpObjectGraph() as graph:
        resolver = PathResolver(graph)

        paths = [
            "/ipfs/QmYwAPJzv5CZsnA625s3Xf2nemtYgPpHdWEz79ojWnPbdG/readme",
            "QmYwAPJzv5CZsnA625s3Xf2nemtYgPpHdWEz79ojWnPbdG",
        ]

        try:
            for path, identifier in zip(paths, await resolver.resolve(paths)):
                print(f"{path} -> {identifier}")
        except BatchResolutionError as e:
            print(f"Some paths failed: {e}")


if __name__ == "__main__":
    asyncio.run(main())
