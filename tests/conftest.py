"""Shared test fixtures for prismark tests."""

import json
import textwrap

import pytest


def escape_settings(settings: dict) -> str:
    """Escape settings JSON the way the Markdown renderer does."""
    text = json.dumps(settings)
    return (
        text.replace("&", "&amp;")
        .replace('"', "&quot;")
        .replace("{", "&#123;")
        .replace("}", "&#125;")
        .replace("/", "&#x2F;")
    )


def escape_code(code: str) -> str:
    return code.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def prism(settings: dict, code: str) -> str:
    """Build a single-block marker as it appears in rendered posts."""
    return f'<prism data-settings="{escape_settings(settings)}">{escape_code(code)}</prism>'


class PlainGrammars:
    """Grammar registry stand-in that knows every language and returns code as is."""

    def __init__(self, known=None):
        self.known = known
        self.calls = []

    def has_grammar(self, lang):
        return self.known is None or lang in self.known

    def highlight(self, lang, code):
        self.calls.append((lang, code))
        return code


@pytest.fixture
def plain_grammars():
    return PlainGrammars()


@pytest.fixture
def theme_dirs(tmp_path):
    """A standard theme directory and an extra one with an overlapping name."""
    standard = tmp_path / "themes"
    standard.mkdir()
    (standard / "prism.css").write_text("/* default */")
    (standard / "prism-coy.css").write_text("/* coy */")
    (standard / "prism-dark.css").write_text("/* dark */")
    (standard / "README.md").write_text("not a theme")

    extra = tmp_path / "extra"
    extra.mkdir()
    (extra / "prism-sitetheme.css").write_text("/* sitetheme */")
    (extra / "prism-dark.css").write_text("/* other dark */")
    return standard, extra


@pytest.fixture
def site(tmp_path):
    """A minimal site directory with a _config.yml and rendered files.

    Returns a factory taking the prism_plugin options.
    """
    def make(options=None, root="/blog/"):
        scripts = tmp_path / "scripts"
        scripts.mkdir(exist_ok=True)
        (scripts / "prism.js").write_text("// prism runtime")
        (scripts / "prism-line-numbers.min.js").write_text("// line numbers runtime")

        lines = ["title: Test site", f"root: {root}"]
        if options is not None:
            lines.append("prism_plugin:")
            for key, value in options.items():
                lines.append(f"  {key}: {json.dumps(value)}")
        path = tmp_path / "_config.yml"
        path.write_text("\n".join(lines) + "\n")
        return path

    return make


@pytest.fixture
def page():
    return textwrap.dedent("""\
        <html>
        <head>
        <title>Post</title>
        </head>
        <body><p>hello</p></body>
        </html>
    """)


@pytest.fixture
def marker():
    """Factory building <prism> markers: marker(settings, code)."""
    return prism
