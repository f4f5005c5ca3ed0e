"""Highlighting, line numbering and wrapping of ``<prism>`` code blocks."""

from __future__ import annotations

import html
import logging
import re
from typing import Protocol

from prismark.lang import GrammarRegistry
from prismark.stages.transform.markup import (
    MULTIPRISM_RE,
    PRISM_RE,
    BlockConfig,
    parse_block,
    unescape_code,
)

logger = logging.getLogger(__name__)

LINE_NUMBERS_CLASS = "line-numbers"

# A trailing newline does not start a new line
_LINE_BREAK_RE = re.compile(r"\n(?!\Z)")


class Grammars(Protocol):
    def has_grammar(self, lang: str) -> bool: ...

    def highlight(self, lang: str, code: str) -> str: ...


def count_lines(rendered: str) -> int:
    """Number of lines in *rendered*, ignoring a single trailing newline."""
    return len(_LINE_BREAK_RE.findall(rendered)) + 1


def line_number_rows(count: int, first_line: int | None = None) -> str:
    """Zero-width row markers consumed by the line-numbers stylesheet."""
    count_from = (
        f' style="counter-reset: linenumber {first_line - 1};"' if first_line else ""
    )
    return (
        f'<span aria-hidden="true" class="line-numbers-rows"{count_from}>'
        + "<span></span>" * count
        + "</span>"
    )


class MarkupTransformer:
    """Rewrites prism markers in rendered HTML into highlighted code.

    ``line_number`` is the current default for blocks without their own
    ``line_number`` setting.  A block that does set it replaces the default
    for every later block and every later ``transform`` call on this
    instance.
    """

    def __init__(
        self,
        line_number: bool = False,
        grammars: Grammars | None = None,
    ) -> None:
        self.line_number = line_number
        self.grammars = grammars if grammars is not None else GrammarRegistry()

    def _resolve_line_number(self, config: BlockConfig) -> bool:
        if config.line_number is not None:
            self.line_number = bool(config.line_number)
        return self.line_number

    def _line_numbers_class(self) -> str:
        return LINE_NUMBERS_CLASS if self.line_number else ""

    def refract(self, config: BlockConfig, code: str) -> str:
        """Render the ``<code>`` element for one block."""
        if not config.lang:
            return f"<pre><code>{code}</code></pre>"

        line_number = self._resolve_line_number(config)
        code = unescape_code(code)
        if self.grammars.has_grammar(config.lang):
            parsed = self.grammars.highlight(config.lang, code)
        else:
            logger.debug("rendering %r block as plain text", config.lang)
            parsed = html.escape(code, quote=False)

        if line_number:
            parsed += line_number_rows(count_lines(parsed), config.first_line)
        return f'<code class="language-{config.lang}">{parsed}</code>'

    def wrap(self, config: BlockConfig, code: str) -> str:
        """Render one block together with its ``<pre>`` and caption."""
        if not config.lang:
            return self.refract(config, code)

        self._resolve_line_number(config)
        caption = f"<figcaption>{config.caption}</figcaption>" if config.caption else ""
        if config.multi:
            return caption + self.refract(config, code)
        return (
            f'<pre class="{self._line_numbers_class()} language-{config.lang}">{caption}'
            + self.refract(config, code)
            + "</pre>"
        )

    def _wrap_match(self, match: re.Match[str]) -> str:
        settings, code = match.group(1), match.group(2)
        return self.wrap(parse_block(settings), code)

    def reprism(self, content: str) -> str:
        """Resolve every single-block marker in *content*."""
        return PRISM_RE.sub(self._wrap_match, content)

    def multiwrap(self, content: str) -> str:
        """Resolve every multi-block marker in *content*.

        The shared ``<pre>`` takes its language and line-numbers class from
        the first nested block.
        """

        def replace(match: re.Match[str]) -> str:
            lang: str | None = None
            ln: str | None = None

            def member(inner: re.Match[str]) -> str:
                nonlocal lang, ln
                config = parse_block(inner.group(1), multi=True)
                rendered = self.wrap(config, inner.group(2))
                if lang is None:
                    lang = config.lang or ""
                    ln = self._line_numbers_class()
                return rendered

            body = PRISM_RE.sub(member, match.group(1))
            if ln is None:
                ln = self._line_numbers_class()
            return f'<pre class="{ln} language-{lang or ""}">{body}</pre>'

        return MULTIPRISM_RE.sub(replace, content)

    def transform(self, content: str) -> str:
        """Resolve multi-block markers, then the remaining single blocks."""
        content = self.multiwrap(content)
        return self.reprism(content)
