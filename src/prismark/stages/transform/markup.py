"""Marker scanning and entity un-escaping.

Rendered posts carry code blocks as

    <prism data-settings="{&quot;lang&quot;: &quot;js&quot;}">code</prism>

optionally grouped inside ``<multiprism>...</multiprism>``.  The upstream
Markdown renderer HTML-escapes both the settings attribute and the code body,
and additionally escapes braces (``&#123;``/``&#125;``) and forward slashes
(``&#x2F;``), so both have to be reversed before use.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any

from prismark.errors import SettingsParseError

ENTITY_MAP = {
    "&#39;": "'",
    "&amp;": "&",
    "&gt;": ">",
    "&lt;": "<",
    "&quot;": '"',
}

_ENTITY_RE = re.compile("|".join(re.escape(entity) for entity in ENTITY_MAP))

# The attribute value is entity-escaped, so it never holds a raw double quote.
PRISM_RE = re.compile(
    r'<prism data-settings="([^"]*)">(.*?)</prism>',
    re.IGNORECASE | re.DOTALL,
)
MULTIPRISM_RE = re.compile(
    r"<multiprism>(.*?)</multiprism>",
    re.IGNORECASE | re.DOTALL,
)


@dataclass
class BlockConfig:
    """Per-block settings decoded from a marker's ``data-settings``."""

    lang: str | None = None
    line_number: bool | None = None
    first_line: int | None = None
    caption: str | None = None
    multi: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, multi: bool = False) -> BlockConfig:
        """Build a config from decoded settings, coercing value types.

        Raises SettingsParseError for values that cannot be coerced.
        """
        lang = data.get("lang")
        if isinstance(lang, (dict, list)):
            raise SettingsParseError(json.dumps(data), f"invalid lang {lang!r}")

        first_line = data.get("first_line")
        if first_line is not None:
            if isinstance(first_line, (dict, list)):
                raise SettingsParseError(json.dumps(data), f"invalid first_line {first_line!r}")
            try:
                first_line = int(first_line)
            except ValueError as e:
                raise SettingsParseError(json.dumps(data), f"invalid first_line {first_line!r}") from e

        line_number = data.get("line_number")
        caption = data.get("caption")
        # "multi" is internal and never taken from author settings
        return cls(
            lang=str(lang) if lang else None,
            line_number=bool(line_number) if line_number is not None else None,
            first_line=first_line,
            caption=str(caption) if caption is not None else None,
            multi=multi,
        )


def unescape(text: str | None) -> str:
    """Reverse the renderer's HTML entity escaping in a single pass."""
    if not text:
        return ""
    return _ENTITY_RE.sub(lambda m: ENTITY_MAP[m.group(0)], str(text))


def unescape_braces(text: str) -> str:
    return text.replace("&#123;", "{").replace("&#125;", "}")


def unescape_code(code: str) -> str:
    """Unescape a code body: braces first, then the entity table."""
    return unescape(unescape_braces(code))


def decode_settings(text: str) -> dict[str, Any]:
    """Decode a ``data-settings`` attribute value into a dict.

    Raises SettingsParseError when the unescaped text is not a JSON object.
    """
    raw = unescape(unescape_braces(text)).replace("&#x2F;", "/")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise SettingsParseError(raw, str(e)) from e
    if not isinstance(data, dict):
        raise SettingsParseError(raw, "expected a JSON object")
    return data


def parse_block(settings: str, *, multi: bool = False) -> BlockConfig:
    return BlockConfig.from_dict(decode_settings(settings), multi=multi)
