"""Write converted maps to disk as JSON."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Union

from .models import ArchivalMap, GraphMap, RawDocument


def to_json(converted: Union[ArchivalMap, GraphMap], *, indent: int = 2) -> str:
    """Serialize an archival or graph map. Non-ASCII text is kept as-is."""
    return json.dumps(converted.to_dict(), indent=indent, ensure_ascii=False)


def write(converted: Union[ArchivalMap, GraphMap], path: Union[str, Path]) -> Path:
    """Write `converted` to `path`, creating parent directories as needed.

    Returns:
        The path written to.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_json(converted) + "\n", encoding="utf-8")
    return path


def output_path(source: Path, input_root: Path, output_root: Path) -> Path:
    """Mirror `source`'s location under `input_root` into `output_root`."""
    if input_root.is_file():
        return output_root / source.name
    return output_root / source.relative_to(input_root)


def _node_fields(node) -> dict:
    title = {"text": node.title}
    if node.max_width is not None:
        title["maxWidth"] = node.max_width
    out = {
        "id": node.id,
        "title": title,
        "location": node.location.to_dict(),
        "nodes": [],
    }
    if node.note is not None:
        out["note"] = {"text": node.note}
    if node.border_color is not None:
        out["shapeStyle"] = {"borderStrokeStyle": {"color": node.border_color}}
    return out


def document_to_dict(document: RawDocument) -> dict:
    """Serialize a RawDocument back to MindNode's JSON layout.

    Only the fields this package reads are written; used to save the result
    of `parse_ids`.
    """
    nodes = []
    stack = [(node, nodes) for node in reversed(document.nodes)]
    while stack:
        node, siblings = stack.pop()
        out = _node_fields(node)
        siblings.append(out)
        for child in reversed(node.children):
            stack.append((child, out["nodes"]))

    connections = []
    for conn in document.connections:
        out = {
            "startNodeID": conn.start_id,
            "endNodeID": conn.end_id,
            "wayPointOffset": conn.offset.to_dict(),
        }
        if conn.title is not None:
            out["title"] = {"text": conn.title}
        connections.append(out)

    return {
        "title": document.title,
        "nodes": nodes,
        "connections": connections,
    }
