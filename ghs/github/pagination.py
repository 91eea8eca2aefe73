"""Cursor-based pagination over GraphQL connections.

A connection is any object shaped like
``{"pageInfo": {"hasNextPage": bool, "endCursor": str}, "nodes": [...]}``.
The query must declare an ``$after: String`` variable.
"""

from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar
from ghs.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

Execute = Callable[[str, Dict[str, Any]], Awaitable[Dict[str, Any]]]
ConnectionGetter = Callable[[Dict[str, Any]], Optional[Dict[str, Any]]]


async def collect_pages(
    execute: Execute,
    query: str,
    variables: Dict[str, Any],
    connection: ConnectionGetter,
    limit: Optional[int] = None,
    transform: Optional[Callable[[Dict[str, Any]], Optional[T]]] = None,
) -> List[Any]:
    """Run ``query`` page by page and accumulate the connection's nodes.

    Args:
        execute: Coroutine function executing a document with variables.
        query: GraphQL document with an ``$after`` cursor variable.
        variables: Variables other than ``after``.
        connection: Picks the connection out of a response; returning None
            ends the collection.
        limit: Stop once this many records were accepted, even mid-page.
            None collects every page.
        transform: Maps a raw node to a record; None means skip the node.
            Raw nodes are kept when omitted. Null nodes are always skipped.

    Returns:
        Records in service order. Errors propagate and nothing partial is
        returned.
    """
    results: List[Any] = []
    after: Optional[str] = None
    page = 0

    while True:
        data = await execute(query, {**variables, "after": after})
        page += 1
        conn = connection(data)
        if not conn:
            break

        nodes = conn.get("nodes") or []
        logger.debug(f"Fetched page {page} with {len(nodes)} nodes")

        for node in nodes:
            if node is None:
                continue
            record = transform(node) if transform else node
            if record is None:
                continue
            results.append(record)
            if limit is not None and len(results) >= limit:
                return results

        page_info = conn.get("pageInfo") or {}
        if not page_info.get("hasNextPage"):
            break
        after = page_info.get("endCursor")
        if not after:
            break

    return results
