"""Theme discovery and stylesheet generation.

Themes come from ``prism-<name>.css`` files in theme directories and from
the installed Pygments styles.  A style theme is the static layout base
followed by the token rules Pygments generates for that style.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from pygments.formatters import HtmlFormatter
from pygments.styles import get_all_styles

from prismark.errors import InvalidThemeError

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent.parent.parent / "static"
STANDARD_THEME_DIR = STATIC_DIR / "themes"
LINE_NUMBERS_DIR = STATIC_DIR / "plugins" / "line-numbers"

DEFAULT_THEME = "default"
DEFAULT_THEME_FILE = "prism.css"

# Token rules apply inside every language-* block
STYLE_SCOPE = ['pre[class*="language-"]', 'code[class*="language-"]']

_THEME_RE = re.compile(r"^prism-(.*)\.css$")


@dataclass(frozen=True)
class ThemeDescriptor:
    """A named stylesheet for highlighted code.

    ``style`` names the Pygments style whose rules are appended to the file
    at ``path``; file themes have none and are served as they are.
    """

    name: str
    filename: str
    path: Path
    style: str | None = None


def to_theme(base: Path, filename: str) -> ThemeDescriptor | None:
    """Describe *filename* as a theme, or return None if it is not one."""
    m = _THEME_RE.match(filename)
    if m is None:
        return None
    return ThemeDescriptor(name=m.group(1), filename=filename, path=base / filename)


def _list_themes(directory: Path) -> list[ThemeDescriptor]:
    themes = (to_theme(directory, f.name) for f in sorted(directory.iterdir()) if f.is_file())
    return [t for t in themes if t is not None]


def _style_themes(base: Path) -> list[ThemeDescriptor]:
    return [
        ThemeDescriptor(name=style, filename=f"prism-{style}.css", path=base, style=style)
        for style in sorted(get_all_styles())
        if style != DEFAULT_THEME
    ]


def discover_themes(
    standard_dir: Path = STANDARD_THEME_DIR,
    extra_dirs: list[Path] | None = None,
    *,
    include_styles: bool = True,
) -> list[ThemeDescriptor]:
    """Merge file themes of the standard and extra directories with Pygments styles.

    The first source providing a name wins, directories before styles.
    The ``default`` theme, ``prism.css`` of the standard directory with the
    Pygments ``default`` style, is always appended.
    """
    base = standard_dir / DEFAULT_THEME_FILE
    themes = _list_themes(standard_dir)
    for d in extra_dirs or []:
        if not d.is_dir():
            logger.warning("theme directory %s does not exist, skipping", d)
            continue
        themes.extend(_list_themes(d))

    merged: dict[str, ThemeDescriptor] = {}
    for theme in themes:
        if theme.name in merged or theme.name == DEFAULT_THEME:
            logger.warning("duplicate theme %r in %s ignored", theme.name, theme.path.parent)
            continue
        merged[theme.name] = theme

    if include_styles:
        for theme in _style_themes(base):
            merged.setdefault(theme.name, theme)

    merged[DEFAULT_THEME] = ThemeDescriptor(
        name=DEFAULT_THEME,
        filename=DEFAULT_THEME_FILE,
        path=base,
        style=DEFAULT_THEME if include_styles else None,
    )
    return list(merged.values())


def theme_css(theme: ThemeDescriptor) -> str:
    """Full stylesheet text of *theme*."""
    css = theme.path.read_text()
    if theme.style is None:
        return css
    rules = HtmlFormatter(style=theme.style).get_style_defs(STYLE_SCOPE)
    return css.rstrip("\n") + "\n\n" + rules + "\n"


def find_theme(themes: list[ThemeDescriptor], name: str) -> ThemeDescriptor:
    """Look up a theme by name.

    Raises InvalidThemeError listing the valid names when it is unknown.
    """
    for theme in themes:
        if theme.name == name:
            return theme
    raise InvalidThemeError(name, [t.name for t in themes])
