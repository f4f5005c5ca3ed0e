"""Grammar registry: maps Prism language ids to Pygments lexers."""

from __future__ import annotations

import logging

from pygments import highlight as _pygments_highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)


# Prism ids that Pygments knows under another alias
ALIAS_MAP = {
    "markup": "html",
    "clike": "c",
    "dotnet": "csharp",
    "plain": "text",
}


class GrammarRegistry:
    """Capability-checked lookup over Pygments lexers.

    ``has_grammar`` tells whether a language id can be highlighted and
    ``highlight`` produces the token markup without any wrapping element.
    Anything exposing these two methods can stand in for the registry.
    """

    def __init__(self, aliases: dict[str, str] | None = None) -> None:
        self.aliases = dict(ALIAS_MAP if aliases is None else aliases)
        self._formatter = HtmlFormatter(nowrap=True)
        self._lexers: dict[str, Lexer | None] = {}

    def _lexer(self, lang: str) -> Lexer | None:
        if lang not in self._lexers:
            name = self.aliases.get(lang, lang)
            try:
                # keep the code verbatim: no stripped or appended newlines
                lexer = get_lexer_by_name(name, stripnl=False, ensurenl=False)
            except ClassNotFound:
                logger.debug("no grammar registered for %r", lang)
                lexer = None
            self._lexers[lang] = lexer
        return self._lexers[lang]

    def has_grammar(self, lang: str) -> bool:
        return self._lexer(lang) is not None

    def highlight(self, lang: str, code: str) -> str:
        """Highlight *code* with the grammar for *lang*.

        Raises KeyError when the language has no grammar; callers check
        ``has_grammar`` first.
        """
        lexer = self._lexer(lang)
        if lexer is None:
            raise KeyError(lang)
        result = _pygments_highlight(code, lexer, self._formatter)
        # HtmlFormatter terminates the last line even when the code does not
        if result.endswith("\n") and not code.endswith("\n"):
            result = result[:-1]
        return result
