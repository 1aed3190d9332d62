"""Read MindNode JSON documents into Python objects."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterator, Union

from .errors import DocumentFormatError
from .models import RawDocument

logger = logging.getLogger(__name__)

DOCUMENT_SUFFIX = ".json"


def load(data: dict) -> RawDocument:
    """Build a RawDocument from an already-decoded MindNode mapping.

    Raises:
        DocumentFormatError: If a node or connection lacks a required key.
    """
    return RawDocument.from_dict(data)


def read(path: Union[str, Path]) -> RawDocument:
    """Read a MindNode .json file and return a RawDocument.

    Args:
        path: Path to the document.

    Returns:
        A RawDocument with the full node tree and connections.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        json.JSONDecodeError: If the file isn't valid JSON.
        DocumentFormatError: If the JSON doesn't describe a mind map, or
            nests deeper than the JSON decoder can follow.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        try:
            data = json.load(fh)
        except RecursionError:
            raise DocumentFormatError(f"{path} is nested too deeply to decode") from None

    document = load(data)
    logger.debug("Read %s: %r", path, document)
    return document


def find_documents(root: Union[str, Path]) -> Iterator[Path]:
    """Yield every MindNode document under `root`, or `root` itself if it is a file.

    Directories are walked recursively in sorted order.
    """
    root = Path(root)
    if root.is_file():
        yield root
        return
    if not root.is_dir():
        raise FileNotFoundError(f"No such file or directory: {root}")

    for path in sorted(root.rglob(f"*{DOCUMENT_SUFFIX}")):
        if path.is_file():
            yield path
