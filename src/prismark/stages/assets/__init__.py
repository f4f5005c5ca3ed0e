"""Assets stage – themes, generated static files and head-tag injection.

Public API
----------
- themes(config_path) -> dict
- generate(config_path, public_dir) -> dict
- inject(config_path, file, *, in_place=False) -> dict
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from prismark.stages.assets.generator import Asset, collect_assets, write_assets  # noqa: F401
from prismark.stages.assets.injector import build_imports, inject_assets  # noqa: F401
from prismark.stages.assets.themes import (  # noqa: F401
    ThemeDescriptor,
    discover_themes,
    find_theme,
)


def _plugin(config_path: str):
    from prismark.plugin import PrismPlugin

    return PrismPlugin.from_config_file(config_path)


def themes(config_path: str) -> dict[str, Any]:
    """List every discovered theme and the selected one."""
    plugin = _plugin(config_path)
    return {
        "themes": [
            {"name": t.name, "filename": t.filename, "path": str(t.path), "style": t.style}
            for t in plugin.themes
        ],
        "count": len(plugin.themes),
        "selected": plugin.theme.name,
    }


def generate(config_path: str, public_dir: str) -> dict[str, Any]:
    """Write the theme/line-numbers/runtime assets into *public_dir*."""
    plugin = _plugin(config_path)
    if not plugin.settings.manage_assets:
        return {"status": "disabled", "written": [], "count": 0}
    written = write_assets(plugin.generate_assets(), public_dir)
    return {"status": "written", "written": written, "count": len(written)}


def inject(config_path: str, file: str, *, in_place: bool = False) -> dict[str, Any]:
    """Add the asset imports to one rendered page."""
    plugin = _plugin(config_path)
    p = Path(file)
    page = p.read_text()
    if not plugin.settings.manage_assets:
        return {"file": file, "injected": False, "html": page}

    result = plugin.after_render_html(page)
    injected = result != page
    if in_place and injected:
        p.write_text(result)
    return {"file": file, "injected": injected, "html": result}
