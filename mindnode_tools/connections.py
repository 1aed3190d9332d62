"""Resolve connection endpoints from node ids to display text."""

from __future__ import annotations

from typing import Iterable, Mapping

from .errors import MissingNodeError
from .html import extract_text
from .models import Identifier, ParsedConnection, ParsedNode, RawConnection, RawNode


def build_lookup(pairs: Iterable[tuple[RawNode, ParsedNode]]) -> dict[Identifier, str]:
    """Map each raw node id to its parsed display text.

    Only top-level nodes are expected here: connections never point at
    nested nodes.
    """
    return {raw.id: parsed.text for raw, parsed in pairs}


def _lookup(lookup: Mapping[Identifier, str], node_id: Identifier, endpoint: str) -> str:
    try:
        return lookup[node_id]
    except KeyError:
        raise MissingNodeError(node_id, endpoint) from None


def resolve_connection(conn: RawConnection, lookup: Mapping[Identifier, str]) -> ParsedConnection:
    """Convert a raw connection into its archival form.

    Raises:
        MissingNodeError: If either endpoint is absent from `lookup`.
    """
    parsed = ParsedConnection(
        source=_lookup(lookup, conn.start_id, "start"),
        target=_lookup(lookup, conn.end_id, "end"),
        curve=conn.offset,
    )

    if conn.title:
        parsed.text = extract_text(conn.title)

    return parsed
