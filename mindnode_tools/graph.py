"""Convert a MindNode document into a node/link graph for force layouts.

Unlike the archive, the graph keeps raw node ids and markup: styles are
stripped and emojis become images, but tags stay so the renderer can embed
the HTML directly. A random share of nodes and links is pinned to its saved
position while the rest float; pass a seeded ``random.Random`` as `rng` for
reproducible output.
"""

from __future__ import annotations

import logging
import random
from typing import Iterable, Optional

from .dimensions import Measure, estimate_dimensions
from .emojis import convert_emojis, strip_style_attributes
from .errors import DuplicateIdError, MissingNodeError
from .flatten import by_identifier, flatten
from .html import extract_text
from .models import GraphLink, GraphMap, GraphNode, Identifier, RawConnection, RawDocument, RawNode

logger = logging.getLogger(__name__)

NODE_FIXED_RATIO = 0.85
LINK_FIXED_RATIO = 0.75
HEIGHT_PADDING = 4
NODE_STYLE_CLASS = "mindmap-node"


def node_html(node: RawNode) -> str:
    """Title markup with inline styles removed and emojis as images."""
    return convert_emojis(strip_style_attributes(node.title))


def convert_node(
    node: RawNode,
    parent: Optional[Identifier] = None,
    *,
    measure: Measure = estimate_dimensions,
    rng=None,
) -> GraphNode:
    rng = rng if rng is not None else random.Random()
    html = node_html(node)

    constraints = {}
    if node.max_width is not None:
        constraints["maxWidth"] = node.max_width
    dimensions = measure(html, constraints, NODE_STYLE_CLASS)

    fixed = rng.random() < NODE_FIXED_RATIO

    return GraphNode(
        id=node.id,
        html=html,
        color=node.border_color,
        fx=node.location.x if fixed else None,
        fy=node.location.y if fixed else None,
        width=node.max_width,
        height=dimensions.height + HEIGHT_PADDING,
        parent=parent,
    )


def convert_nodes(
    nodes: Iterable[RawNode],
    *,
    measure: Measure = estimate_dimensions,
    rng=None,
) -> tuple[list[GraphNode], list[GraphNode]]:
    """Convert a node tree at every depth.

    Returns ``(nodes, subnodes)``: all nodes in pre-order, and the nested
    ones only. Both lists share the same GraphNode objects.
    """
    rng = rng if rng is not None else random.Random()
    converted = []
    subnodes = []

    for entry in flatten(nodes, by_identifier):
        graph_node = convert_node(entry.node, entry.parent, measure=measure, rng=rng)
        converted.append(graph_node)
        if not entry.is_top_level:
            subnodes.append(graph_node)

    return converted, subnodes


def convert_links(connections: Iterable[RawConnection], *, rng=None) -> list[GraphLink]:
    rng = rng if rng is not None else random.Random()
    links = []

    for conn in connections:
        fixed = rng.random() < LINK_FIXED_RATIO
        links.append(
            GraphLink(
                source=conn.start_id,
                target=conn.end_id,
                curve_x=conn.offset.x if fixed else None,
                curve_y=conn.offset.y if fixed else None,
            )
        )

    return links


def convert_graph(
    document: RawDocument,
    *,
    measure: Measure = estimate_dimensions,
    rng=None,
) -> GraphMap:
    """Build the graph shape of `document`.

    Args:
        document: The parsed MindNode document.
        measure: Callable returning the rendered size of node markup.
        rng: Source of uniform draws in [0, 1); any object with a
            ``random()`` method. Defaults to a fresh ``random.Random()``.

    Returns:
        A GraphMap whose nodes and links are keyed by raw node id.
    """
    rng = rng if rng is not None else random.Random()
    nodes, subnodes = convert_nodes(document.nodes, measure=measure, rng=rng)
    links = convert_links(document.connections, rng=rng)

    logger.debug(
        "Graphed %r: %d nodes (%d pinned), %d links (%d pinned)",
        document.title,
        len(nodes),
        sum(1 for n in nodes if n.fixed),
        len(links),
        sum(1 for link in links if link.fixed),
    )
    return GraphMap(nodes=nodes, links=links, subnodes=subnodes)


def parse_ids(document: RawDocument) -> RawDocument:
    """Replace every node id with its display text, in place.

    Nested nodes are renamed too and connection endpoints are rewritten to
    match. Every new id is computed and checked before anything is
    modified, so on error the document is left untouched.

    Raises:
        DuplicateIdError: If two nodes share the same display text.
        MissingNodeError: If a connection points at an unknown node id.
    """
    new_ids: dict[Identifier, str] = {}
    owners: dict[str, Identifier] = {}

    entries = flatten(document.nodes, by_identifier)

    for entry in entries:
        node = entry.node
        text = extract_text(node.title)
        if text in owners:
            raise DuplicateIdError(text, owners[text], node.id)
        owners[text] = node.id
        new_ids[node.id] = text

    for conn in document.connections:
        if conn.start_id not in new_ids:
            raise MissingNodeError(conn.start_id, "start")
        if conn.end_id not in new_ids:
            raise MissingNodeError(conn.end_id, "end")

    for entry in entries:
        entry.node.id = new_ids[entry.value]

    for conn in document.connections:
        conn.start_id = new_ids[conn.start_id]
        conn.end_id = new_ids[conn.end_id]

    return document
