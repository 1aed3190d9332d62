"""Size estimation for rendered node markup.

The graph converter only needs a node's height. Real layouts come from the
rendering surface; callers with access to one pass their own `Measure`
callable. `estimate_dimensions` is a font-agnostic fallback good enough for
initial placement.
"""

from __future__ import annotations

import math
import re
from typing import NamedTuple, Optional, Protocol

CHAR_WIDTH = 8
LINE_HEIGHT = 20
EMOJI_WIDTH = 20
DEFAULT_MAX_WIDTH = 300

_IMG_TAG = re.compile(r"<img\b[^>]*>")
_BREAK = re.compile(r"<br\s*/?>|</p>", re.IGNORECASE)
_TAG = re.compile(r"<[^>]+>")


class Dimensions(NamedTuple):
    width: float
    height: float


class Measure(Protocol):
    def __call__(self, markup: str, constraints: dict, style_class: str) -> Dimensions: ...


def estimate_dimensions(markup: str, constraints: Optional[dict] = None, style_class: str = "") -> Dimensions:
    """Estimate the box `markup` occupies when wrapped to ``constraints["maxWidth"]``."""
    max_width = (constraints or {}).get("maxWidth") or DEFAULT_MAX_WIDTH

    lines = [line for line in _BREAK.split(markup) if _TAG.sub("", line).strip() or _IMG_TAG.search(line)]
    if not lines:
        return Dimensions(width=0, height=LINE_HEIGHT)

    widest = 0
    line_count = 0
    for line in lines:
        images = len(_IMG_TAG.findall(line))
        text = _TAG.sub("", line).strip()
        width = len(text) * CHAR_WIDTH + images * EMOJI_WIDTH
        line_count += max(1, math.ceil(width / max_width))
        widest = max(widest, min(width, max_width))

    return Dimensions(width=widest, height=line_count * LINE_HEIGHT)
