"""Convert a MindNode document into the flat, text-keyed archival shape."""

from __future__ import annotations

import logging

from .connections import build_lookup, resolve_connection
from .flatten import flatten
from .html import parse_node
from .models import ArchivalMap, ParsedSubnode, RawDocument

logger = logging.getLogger(__name__)


def convert_archive(document: RawDocument) -> ArchivalMap:
    """Flatten `document` into top-level nodes, subnodes and connections.

    Subnodes reference their parent by display text, and connection
    endpoints are resolved to display text as well. The result is fully
    deterministic.

    Raises:
        MissingNodeError: If a connection points at an unknown node id.
    """
    entries = flatten(document.nodes, parse_node)

    archive = ArchivalMap(title=document.title)
    top_level = []

    for entry in entries:
        if entry.is_top_level:
            archive.nodes.append(entry.value)
            top_level.append((entry.node, entry.value))
        else:
            archive.subnodes.append(ParsedSubnode.from_node(entry.value, parent=entry.parent.text))

    # Connections are resolved only once every top-level node is known.
    lookup = build_lookup(top_level)
    archive.connections = [resolve_connection(c, lookup) for c in document.connections]

    logger.debug(
        "Archived %r: %d nodes, %d subnodes, %d connections",
        document.title,
        len(archive.nodes),
        len(archive.subnodes),
        len(archive.connections),
    )
    return archive
