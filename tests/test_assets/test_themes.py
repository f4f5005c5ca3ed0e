"""Tests for theme discovery and stylesheet generation."""

import pytest
from pygments.styles import get_all_styles

from prismark.errors import ConfigurationError, InvalidThemeError
from prismark.stages.assets.themes import (
    STANDARD_THEME_DIR,
    ThemeDescriptor,
    discover_themes,
    find_theme,
    theme_css,
    to_theme,
)


class TestToTheme:
    def test_theme_file(self, tmp_path):
        assert to_theme(tmp_path, "prism-coy.css") == ThemeDescriptor(
            name="coy", filename="prism-coy.css", path=tmp_path / "prism-coy.css"
        )

    def test_default_file_is_not_matched(self, tmp_path):
        assert to_theme(tmp_path, "prism.css") is None

    def test_other_files(self, tmp_path):
        assert to_theme(tmp_path, "prism-coy.css.map") is None
        assert to_theme(tmp_path, "README.md") is None


class TestDiscoverFileThemes:
    def test_standard_only(self, theme_dirs):
        standard, _ = theme_dirs
        names = [t.name for t in discover_themes(standard, include_styles=False)]
        assert names == ["coy", "dark", "default"]

    def test_merge_extra(self, theme_dirs):
        standard, extra = theme_dirs
        themes = discover_themes(standard, [extra], include_styles=False)
        by_name = {t.name: t for t in themes}
        assert sorted(by_name) == ["coy", "dark", "default", "sitetheme"]
        assert len(themes) == len(by_name)
        # first directory wins on a clash
        assert by_name["dark"].path == standard / "prism-dark.css"
        assert by_name["sitetheme"].path == extra / "prism-sitetheme.css"

    def test_default_entry(self, theme_dirs):
        standard, _ = theme_dirs
        default = find_theme(discover_themes(standard, include_styles=False), "default")
        assert default.filename == "prism.css"
        assert default.path == standard / "prism.css"
        assert default.style is None

    def test_missing_extra_dir_skipped(self, theme_dirs, tmp_path):
        standard, _ = theme_dirs
        names = [t.name for t in discover_themes(standard, [tmp_path / "missing"])]
        assert "default" in names


class TestDiscoverStyleThemes:
    def test_every_pygments_style(self, theme_dirs):
        standard, _ = theme_dirs
        names = {t.name for t in discover_themes(standard)}
        assert set(get_all_styles()) <= names

    def test_style_descriptor(self, theme_dirs):
        standard, _ = theme_dirs
        monokai = find_theme(discover_themes(standard), "monokai")
        assert monokai == ThemeDescriptor(
            name="monokai",
            filename="prism-monokai.css",
            path=standard / "prism.css",
            style="monokai",
        )

    def test_default_uses_default_style(self, theme_dirs):
        standard, _ = theme_dirs
        themes = discover_themes(standard)
        assert [t.name for t in themes].count("default") == 1
        assert find_theme(themes, "default").style == "default"

    def test_file_theme_beats_style(self, theme_dirs, tmp_path):
        standard, _ = theme_dirs
        site_dir = tmp_path / "site-themes"
        site_dir.mkdir()
        (site_dir / "prism-monokai.css").write_text("/* own monokai */")
        monokai = find_theme(discover_themes(standard, [site_dir]), "monokai")
        assert monokai.style is None
        assert monokai.path == site_dir / "prism-monokai.css"

    def test_bundled_base(self):
        themes = discover_themes()
        assert find_theme(themes, "default").path == STANDARD_THEME_DIR / "prism.css"
        assert (STANDARD_THEME_DIR / "prism.css").is_file()


class TestThemeCss:
    def test_file_theme_verbatim(self, theme_dirs):
        standard, _ = theme_dirs
        coy = find_theme(discover_themes(standard), "coy")
        assert theme_css(coy) == "/* coy */"

    def test_style_theme_scoped_rules(self, theme_dirs):
        standard, _ = theme_dirs
        css = theme_css(find_theme(discover_themes(standard), "monokai"))
        assert css.startswith("/* default */")
        # token rules for docstrings, builtins and escapes are all generated
        for token in (".sd", ".nb", ".bp", ".se"):
            assert f'code[class*="language-"] {token}' in css

    def test_styles_differ(self):
        themes = discover_themes()
        light = theme_css(find_theme(themes, "default"))
        dark = theme_css(find_theme(themes, "monokai"))
        assert light != dark


class TestFindTheme:
    def test_unknown_lists_valid_names(self, theme_dirs):
        standard, _ = theme_dirs
        with pytest.raises(InvalidThemeError) as exc:
            find_theme(discover_themes(standard, include_styles=False), "solarized")
        assert "Invalid theme solarized" in str(exc.value)
        assert exc.value.valid == ["coy", "dark", "default"]

    def test_is_configuration_error(self, theme_dirs):
        standard, _ = theme_dirs
        with pytest.raises(ConfigurationError):
            find_theme(discover_themes(standard), "nope")
