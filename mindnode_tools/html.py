"""Pull plain text, links and categories out of MindNode title markup.

MindNode stores titles and notes as small HTML fragments such as
``<p style="..."><a href="https://...">Title</a></p>``. Only the pieces the
archive needs are extracted here; nested or malformed markup is handled on a
best-effort basis.
"""

from __future__ import annotations

import re
from typing import Optional

from .emojis import emoji_to_category, match_category_emoji
from .models import ParsedNode, RawNode

BOILERPLATE_NOTE = "if you think this can be improved in any way  please say"

_ANCHOR_TEXT = re.compile(r"<a[^>]*>([^<]*)</a>")
_PARAGRAPH_TEXT = re.compile(r"<p[^>]*>([^>]*)</p>")
_HREF = re.compile(r"""<a[^>]*?\bhref\s*=\s*(?:"([^"]*)"|'([^']*)')""")
_BOILERPLATE = re.compile(r"\s+".join(re.escape(word) for word in BOILERPLATE_NOTE.split()))


def extract_text(markup: str) -> str:
    """Join the text of every anchor (or, failing that, every paragraph).

    >>> extract_text("<p><a href='x'>Hello</a></p>")
    'Hello'
    """
    runs = _ANCHOR_TEXT.findall(markup)
    if not runs:
        runs = _PARAGRAPH_TEXT.findall(markup)
    return " ".join(runs)


def extract_url(markup: str) -> Optional[str]:
    """Return the href of the first link in `markup`, or None."""
    match = _HREF.search(markup)
    if match is None:
        return None
    return match.group(1) if match.group(1) is not None else match.group(2)


def extract_category(text: str) -> tuple[Optional[str], str]:
    """Split a leading category emoji off `text`.

    Returns ``(category, remaining_text)``; when no known emoji leads the
    text the category is None and the text comes back unchanged.
    """
    emoji = match_category_emoji(text)
    if emoji is None:
        return None, text
    return emoji_to_category(emoji), text[len(emoji):].strip()


def strip_boilerplate(note: str) -> str:
    return _BOILERPLATE.sub("", note)


def parse_node(node: RawNode) -> ParsedNode:
    """Convert a raw node into its archival, plain-text form.

    Children are ignored; see `flatten` for walking the tree.
    """
    text = extract_text(node.title)
    note = None
    if node.note is not None:
        note = strip_boilerplate(extract_text(node.note))

    category, text = extract_category(text)

    return ParsedNode(
        text=text,
        position=node.location,
        url=extract_url(node.title),
        note=note,
        category=category,
    )
