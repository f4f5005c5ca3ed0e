"""Static assets (theme CSS, line-numbers CSS, runtime scripts) for the public dir."""

from __future__ import annotations

import io
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable

from prismark.stages.assets.themes import LINE_NUMBERS_DIR, ThemeDescriptor, theme_css

logger = logging.getLogger(__name__)

LINE_NUMBERS_CSS = "prism-line-numbers.css"
LINE_NUMBERS_JS = "prism-line-numbers.min.js"
PRISM_JS = "prism.js"


@dataclass
class Asset:
    """An output file: public path and a factory opening its source stream."""

    path: str
    data: Callable[[], BinaryIO]


def _reader(source: Path) -> Callable[[], BinaryIO]:
    return lambda: source.open("rb")


def _theme_reader(theme: ThemeDescriptor) -> Callable[[], BinaryIO]:
    if theme.style is None:
        return _reader(theme.path)
    return lambda: io.BytesIO(theme_css(theme).encode("utf-8"))


def collect_assets(
    theme: ThemeDescriptor,
    *,
    custom_css: Path | None = None,
    line_number: bool = False,
    realtime: bool = False,
    script_dir: Path | None = None,
) -> list[Asset]:
    """List the assets a build needs.

    The theme stylesheet is served from *custom_css* when given, otherwise it
    is the theme file or, for Pygments style themes, generated on demand.
    Script assets are read from *script_dir* in realtime mode.
    """
    stylesheet = _reader(custom_css) if custom_css is not None else _theme_reader(theme)
    assets = [Asset(path=f"css/{theme.filename}", data=stylesheet)]

    if line_number:
        assets.append(Asset(
            path=f"css/{LINE_NUMBERS_CSS}",
            data=_reader(LINE_NUMBERS_DIR / LINE_NUMBERS_CSS),
        ))

    if realtime:
        if script_dir is None:
            raise ValueError("realtime assets need a script directory")
        assets.append(Asset(path=f"js/{PRISM_JS}", data=_reader(script_dir / PRISM_JS)))
        if line_number:
            assets.append(Asset(
                path=f"js/{LINE_NUMBERS_JS}",
                data=_reader(script_dir / LINE_NUMBERS_JS),
            ))
    return assets


def write_assets(assets: list[Asset], public_dir: str | Path) -> list[str]:
    """Copy *assets* below *public_dir*. Returns the written file paths."""
    root = Path(public_dir)
    written = []
    for asset in assets:
        target = root / asset.path
        target.parent.mkdir(parents=True, exist_ok=True)
        with asset.data() as src, target.open("wb") as dst:
            shutil.copyfileobj(src, dst)
        logger.info("wrote %s", target)
        written.append(str(target))
    return written
