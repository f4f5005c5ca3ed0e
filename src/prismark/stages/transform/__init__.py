"""Transform stage – resolves <prism>/<multiprism> markers in rendered posts.

Public API
----------
- render(config_path, files) -> dict
- settings(text) -> dict
- MarkupTransformer(line_number=False, grammars=None).transform(content) -> str
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from prismark.stages.transform.markup import (  # noqa: F401
    BlockConfig,
    decode_settings,
    unescape,
)
from prismark.stages.transform.renderer import MarkupTransformer  # noqa: F401


def render(config_path: str, files: list[str]) -> dict[str, Any]:
    """Run the post-render filter over *files*, in order, with one plugin."""
    from prismark.plugin import PrismPlugin

    plugin = PrismPlugin.from_config_file(config_path)
    results = []
    for f in files:
        data = plugin.after_post_render({"content": Path(f).read_text()})
        results.append({"file": f, "content": data["content"]})
    return {
        "results": results,
        "count": len(results),
        "line_number": plugin.line_number,
    }


def settings(text: str) -> dict[str, Any]:
    """Decode a raw ``data-settings`` attribute value."""
    return {"settings": decode_settings(text)}
