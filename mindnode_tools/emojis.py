"""Emoji handling for node markup.

Two separate jobs live here:

- Rendering: every emoji above the Basic Multilingual Plane is swapped for an
  ``<img>`` pointing at GitHub's emoji CDN, so the graph renderer does not
  depend on the viewer's fonts. A few glyphs are branded and map to fixed
  icons instead.
- Categorising: a node whose text starts with a known emoji (e.g. 📖 for an
  article) is tagged with that category.
"""

from __future__ import annotations

import re
from typing import Optional

EMOJI_URL = "https://assets-cdn.github.com/images/icons/emoji"

EMOJI_TEMPLATE = '<img class="mindmap-emoji" src="' + EMOJI_URL + '/unicode/{unicode}.png">'
CUSTOM_EMOJI_TEMPLATE = '<img class="mindmap-emoji" src="' + EMOJI_URL + '/{name}.png">'

# Glyphs rendered as fixed brand icons instead of their unicode image.
SPECIAL_EMOJIS: dict[str, str] = {
    "\U0001F419": CUSTOM_EMOJI_TEMPLATE.format(name="octocat"),  # octopus
    "\U0001F916": (  # robot
        '<img class="mindmap-emoji reddit-emoji" '
        'src="https://encrypted-tbn0.gstatic.com/images?q=tbn:ANd9GcTNpOQVZdTCyVamjJPl92KjaDHigNWVM8mOLHPRU4DHoVNJWxCg">'
    ),
    "\U0001F5C2": (  # card index dividers
        '<img class="mindmap-emoji" '
        'src="https://cdn.sstatic.net/Sites/stackoverflow/company/img/logos/se/se-icon.png?v=93426798a1d4">'
    ),
}

EMOJI_CATEGORIES: dict[str, str] = {
    "\U0001F419": "github",         # 🐙
    "\U0001F916": "reddit",         # 🤖
    "\U0001F5C2": "stackexchange",  # 🗂
    "\U0001F4D6": "article",        # 📖
    "\U0001F4DA": "book",           # 📚
    "\U0001F4FA": "video",          # 📺
    "\U0001F393": "course",         # 🎓
    "\U0001F3A7": "podcast",        # 🎧
    "\U0001F4AC": "forum",          # 💬
    "\U0001F6E0": "tool",           # 🛠
    "\U0001F52C": "research",       # 🔬
    "\U0001F3AE": "game",           # 🎮
}

# Any code point outside the BMP (a surrogate pair in UTF-16).
_ASTRAL = re.compile("[\U00010000-\U0010FFFF]")

# style="..." or style='...'
_STYLE_ATTRIBUTE = re.compile(r"""style="([^"]*)"|style='([^']*)'""")

# A leading run of category emojis, each optionally followed by VS16.
_CATEGORY_RUN = re.compile(
    "^(?:(?:" + "|".join(re.escape(e) for e in EMOJI_CATEGORIES) + ")\ufe0f?\\s*)+"
)


def emoji_unicode(char: str) -> str:
    """Return the hex name GitHub uses for an astral emoji, e.g. "1f600"."""
    # Low 10 bits of each UTF-16 half give the offset from U+10000.
    offset = ord(char) - 0x10000
    lead, trail = offset >> 10, offset & 0x3FF
    return "1" + format((lead << 10) + trail, "04x")


def _replace_emoji(match: re.Match) -> str:
    char = match.group(0)
    special = SPECIAL_EMOJIS.get(char)
    if special is not None:
        return special
    return EMOJI_TEMPLATE.format(unicode=emoji_unicode(char))


def convert_emojis(html: str) -> str:
    """Replace every astral emoji in `html` with an image tag."""
    return _ASTRAL.sub(_replace_emoji, html)


def strip_style_attributes(html: str) -> str:
    """Remove all inline style attributes, leaving every other attribute alone."""
    return _STYLE_ATTRIBUTE.sub("", html)


def match_category_emoji(text: str) -> Optional[str]:
    """Return the leading category emoji run of `text`, or None."""
    match = _CATEGORY_RUN.match(text)
    return match.group(0) if match else None


def emoji_to_category(emoji: str) -> Optional[str]:
    """Map an emoji (or a run starting with one) to its category."""
    for char in emoji:
        if char in EMOJI_CATEGORIES:
            return EMOJI_CATEGORIES[char]
    return None
