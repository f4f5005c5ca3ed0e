"""Injects the asset <link>/<script> tags into rendered HTML pages."""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

_HEAD_CLOSE_RE = re.compile(r"<\s*/\s*head\s*>", re.IGNORECASE)


def build_imports(
    root: str,
    theme_filename: str,
    *,
    line_number: bool = False,
    realtime: bool = False,
    custom_css: str | None = None,
) -> str:
    """Compose the import block placed right before ``</head>``."""
    css = [f'<link rel="stylesheet" href="{root}css/{theme_filename}" type="text/css">']
    js: list[str] = []

    if line_number and custom_css is None:
        css.append(f'<link rel="stylesheet" href="{root}css/prism-line-numbers.css" type="text/css">')
    if realtime:
        js.append(f'<script src="{root}js/prism.js"></script>')
        if line_number:
            js.append(f'<script src="{root}js/prism-line-numbers.min.js"></script>')

    return "\n".join(css) + "\n".join(js)


def inject_assets(page: str, imports: str) -> str:
    """Insert *imports* before the closing head tag of *page*.

    Pages that already contain *imports* verbatim, or have no closing head
    tag, are returned unchanged.
    """
    if imports in page:
        return page
    injected, count = _HEAD_CLOSE_RE.subn(lambda _: imports + "</head>", page, count=1)
    if not count:
        logger.debug("no closing head tag, assets not injected")
    return injected
