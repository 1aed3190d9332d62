"""mindnode-tools: Flatten MindNode mind maps for archiving and graph rendering.

A pure Python library for converting MindNode JSON documents.
No external dependencies required.

Usage:
    import mindnode_tools

    # Read a mind map
    doc = mindnode_tools.read("learn-anything/physics.json")
    print(doc)  # RawDocument('Physics', 42 nodes)

    # Flat, text-keyed JSON for storage and search
    archive = mindnode_tools.convert_archive(doc)
    for node in archive.subnodes:
        print(node.parent, "->", node.text)

    # Node/link graph for a force layout, reproducibly pinned
    import random
    graph = mindnode_tools.convert_graph(doc, rng=random.Random(1))

    # Write either shape to disk
    mindnode_tools.write(archive, "out/physics.json")
"""

__version__ = "0.1.0"

from .reader import read, load
from .writer import write, to_json
from .archive import convert_archive
from .graph import convert_graph, parse_ids
from .html import extract_text, extract_url, extract_category, parse_node
from .emojis import convert_emojis, strip_style_attributes
from .flatten import flatten
from .connections import build_lookup, resolve_connection
from .errors import MindNodeError, DocumentFormatError, MissingNodeError, DuplicateIdError
from .models import (
    RawDocument,
    RawNode,
    RawConnection,
    Point,
    ArchivalMap,
    ParsedNode,
    ParsedSubnode,
    ParsedConnection,
    GraphMap,
    GraphNode,
    GraphLink,
)

__all__ = [
    "read",
    "load",
    "write",
    "to_json",
    "convert_archive",
    "convert_graph",
    "parse_ids",
    "extract_text",
    "extract_url",
    "extract_category",
    "parse_node",
    "convert_emojis",
    "strip_style_attributes",
    "flatten",
    "build_lookup",
    "resolve_connection",
    "MindNodeError",
    "DocumentFormatError",
    "MissingNodeError",
    "DuplicateIdError",
    "RawDocument",
    "RawNode",
    "RawConnection",
    "Point",
    "ArchivalMap",
    "ParsedNode",
    "ParsedSubnode",
    "ParsedConnection",
    "GraphMap",
    "GraphNode",
    "GraphLink",
]
