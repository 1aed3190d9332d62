"""Data models for MindNode documents and their converted forms."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from .errors import DocumentFormatError

# MindNode encodes points either as {"x": .., "y": ..} or as "{x, y}"
_POINT_STRING = re.compile(r"^\{\s*([-+0-9.eE]+)\s*,\s*([-+0-9.eE]+)\s*\}$")

Identifier = Union[str, int]


@dataclass(frozen=True)
class Point:
    """A 2-D location or offset."""
    x: float = 0
    y: float = 0

    @classmethod
    def from_value(cls, value: Any) -> Point:
        if isinstance(value, Point):
            return value
        if isinstance(value, dict):
            try:
                return cls(x=value["x"], y=value["y"])
            except KeyError as exc:
                raise DocumentFormatError(f"Point is missing {exc.args[0]!r}: {value!r}") from None
        if isinstance(value, str):
            match = _POINT_STRING.match(value.strip())
            if match:
                return cls(x=_number(match.group(1)), y=_number(match.group(2)))
        raise DocumentFormatError(f"Cannot read point from {value!r}")

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


def _number(text: str) -> float:
    value = float(text)
    return int(value) if value.is_integer() else value


# --- Input ---------------------------------------------------------------


@dataclass
class RawNode:
    """A single node as stored in a MindNode document.

    `title` and `note` hold the raw HTML markup MindNode writes; nothing is
    extracted until a converter runs.
    """
    id: Identifier
    title: str = ""
    location: Point = field(default_factory=Point)
    note: Optional[str] = None
    max_width: Optional[float] = None
    border_color: Optional[str] = None
    children: list[RawNode] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> RawNode:
        """Build a node and its whole subtree from MindNode's JSON layout.

        Children are built with an explicit stack, so nesting depth is not
        bounded by the recursion limit.
        """
        root = cls._from_fields(data)
        stack = [(root, data)]
        while stack:
            node, node_data = stack.pop()
            for child_data in node_data.get("nodes") or []:
                child = cls._from_fields(child_data)
                node.children.append(child)
                stack.append((child, child_data))
        return root

    @classmethod
    def _from_fields(cls, data: dict) -> RawNode:
        """One node from its mapping, children excluded."""
        for key in ("id", "title", "location"):
            if key not in data:
                raise DocumentFormatError(f"Node is missing required key {key!r}")

        title = data["title"] or {}
        note = data.get("note") or {}
        shape = data.get("shapeStyle") or {}
        border = shape.get("borderStrokeStyle") or {}

        return cls(
            id=data["id"],
            title=title.get("text", ""),
            location=Point.from_value(data["location"]),
            note=note.get("text"),
            max_width=title.get("maxWidth"),
            border_color=border.get("color"),
        )

    def walk(self):
        """Yield this node and all descendants depth-first (pre-order)."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def count(self) -> int:
        """Total number of nodes in this subtree (including self)."""
        return sum(1 for _ in self.walk())

    def __repr__(self) -> str:
        child_count = len(self.children)
        suffix = f" ({child_count} children)" if child_count else ""
        return f"RawNode({self.id!r}{suffix})"


@dataclass
class RawConnection:
    """A curved link between two top-level nodes."""
    start_id: Identifier
    end_id: Identifier
    offset: Point = field(default_factory=Point)
    title: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> RawConnection:
        for key in ("startNodeID", "endNodeID"):
            if key not in data:
                raise DocumentFormatError(f"Connection is missing required key {key!r}")
        title = data.get("title") or {}
        return cls(
            start_id=data["startNodeID"],
            end_id=data["endNodeID"],
            offset=Point.from_value(data.get("wayPointOffset", {"x": 0, "y": 0})),
            title=title.get("text"),
        )


@dataclass
class RawDocument:
    """A complete MindNode document: top-level nodes plus connections."""
    title: str = ""
    nodes: list[RawNode] = field(default_factory=list)
    connections: list[RawConnection] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> RawDocument:
        if not isinstance(data, dict):
            raise DocumentFormatError(f"Expected a JSON object, got {type(data).__name__}")
        return cls(
            title=data.get("title", ""),
            nodes=[RawNode.from_dict(n) for n in data.get("nodes") or []],
            connections=[RawConnection.from_dict(c) for c in data.get("connections") or []],
        )

    @property
    def node_count(self) -> int:
        return sum(node.count() for node in self.nodes)

    def walk(self):
        """Iterate all nodes depth-first, in document order."""
        for node in self.nodes:
            yield from node.walk()

    def __repr__(self) -> str:
        return f"RawDocument({self.title!r}, {self.node_count} nodes)"


# --- Archival output -----------------------------------------------------


@dataclass
class ParsedNode:
    """Plain-text view of a node for storage and search.

    Optional fields set to None are left out of `to_dict()` entirely.
    """
    text: str
    position: Point
    url: Optional[str] = None
    note: Optional[str] = None
    category: Optional[str] = None

    def to_dict(self) -> dict:
        out: dict[str, Any] = {"text": self.text}
        if self.url is not None:
            out["url"] = self.url
        if self.note is not None:
            out["note"] = self.note
        out["position"] = self.position.to_dict()
        if self.category is not None:
            out["category"] = self.category
        return out


@dataclass
class ParsedSubnode(ParsedNode):
    """A nested node; `parent` is the display text of its parent node."""
    parent: str = ""

    @classmethod
    def from_node(cls, node: ParsedNode, parent: str) -> ParsedSubnode:
        return cls(
            text=node.text,
            position=node.position,
            url=node.url,
            note=node.note,
            category=node.category,
            parent=parent,
        )

    def to_dict(self) -> dict:
        out = super().to_dict()
        out["parent"] = self.parent
        return out


@dataclass
class ParsedConnection:
    source: str
    target: str
    curve: Point
    text: Optional[str] = None

    def to_dict(self) -> dict:
        out: dict[str, Any] = {
            "source": self.source,
            "target": self.target,
            "curve": self.curve.to_dict(),
        }
        if self.text is not None:
            out["text"] = self.text
        return out


@dataclass
class ArchivalMap:
    title: str = ""
    nodes: list[ParsedNode] = field(default_factory=list)
    subnodes: list[ParsedSubnode] = field(default_factory=list)
    connections: list[ParsedConnection] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "nodes": [n.to_dict() for n in self.nodes],
            "subnodes": [n.to_dict() for n in self.subnodes],
            "connections": [c.to_dict() for c in self.connections],
        }


# --- Graph output --------------------------------------------------------


@dataclass
class GraphNode:
    """A node prepared for force-directed rendering.

    `fx`/`fy` are None when the node floats freely and are emitted as null;
    `parent` is the raw identifier of the enclosing node. A missing `parent`
    (top level), `width` or `color` is left out of `to_dict()`.
    """
    id: Identifier
    html: str
    width: Optional[float]
    height: float
    fx: Optional[float] = None
    fy: Optional[float] = None
    color: Optional[str] = None
    parent: Optional[Identifier] = None

    @property
    def fixed(self) -> bool:
        return self.fx is not None

    def to_dict(self) -> dict:
        out: dict[str, Any] = {"id": self.id, "html": self.html}
        if self.color is not None:
            out["color"] = self.color
        out["fx"] = self.fx
        out["fy"] = self.fy
        if self.width is not None:
            out["width"] = self.width
        out["height"] = self.height
        if self.parent is not None:
            out["parent"] = self.parent
        return out


@dataclass
class GraphLink:
    """A link between two node identifiers; curve axes are None when floating."""
    source: Identifier
    target: Identifier
    curve_x: Optional[float] = None
    curve_y: Optional[float] = None

    @property
    def fixed(self) -> bool:
        return self.curve_x is not None

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "target": self.target,
            "curve": {"x": self.curve_x, "y": self.curve_y},
        }


@dataclass
class GraphMap:
    nodes: list[GraphNode] = field(default_factory=list)
    links: list[GraphLink] = field(default_factory=list)
    subnodes: list[GraphNode] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "links": [link.to_dict() for link in self.links],
            "subnodes": [n.to_dict() for n in self.subnodes],
        }
