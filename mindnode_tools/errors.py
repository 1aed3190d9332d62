"""Exceptions raised while reading or converting MindNode documents."""

from __future__ import annotations


class MindNodeError(ValueError):
    """Base class for all conversion errors."""


class DocumentFormatError(MindNodeError):
    """The input document lacks data required to flatten it."""


class MissingNodeError(MindNodeError):
    """A connection references a node identifier that is not in the map."""

    def __init__(self, node_id, endpoint: str = "endpoint"):
        self.node_id = node_id
        self.endpoint = endpoint
        super().__init__(f"Connection {endpoint} references unknown node id {node_id!r}")


class DuplicateIdError(MindNodeError):
    """Two nodes derive the same human-readable identifier."""

    def __init__(self, text: str, first_id, second_id):
        self.text = text
        self.ids = (first_id, second_id)
        super().__init__(
            f"Nodes {first_id!r} and {second_id!r} both resolve to id {text!r}"
        )
