"""Host integration: one PrismPlugin per site build."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Protocol

from prismark.lang import GrammarRegistry
from prismark.settings import PluginSettings, load_settings
from prismark.stages.assets.generator import Asset, collect_assets
from prismark.stages.assets.injector import build_imports, inject_assets
from prismark.stages.assets.themes import (
    STANDARD_THEME_DIR,
    ThemeDescriptor,
    discover_themes,
    find_theme,
)
from prismark.stages.transform.renderer import MarkupTransformer

logger = logging.getLogger(__name__)


class Host(Protocol):
    def register_filter(self, name: str, fn: Callable[..., Any]) -> None: ...

    def register_generator(self, name: str, fn: Callable[[], list[Asset]]) -> None: ...


class PrismPlugin:
    """Settings, themes and the markup transformer of one build.

    Raises ConfigurationError (or InvalidThemeError) on construction when
    the settings cannot be honoured.
    """

    def __init__(
        self,
        settings: PluginSettings,
        *,
        standard_theme_dir: Path = STANDARD_THEME_DIR,
        grammars: GrammarRegistry | None = None,
    ) -> None:
        self.settings = settings
        self.themes: list[ThemeDescriptor] = discover_themes(
            standard_theme_dir, settings.theme_dirs
        )
        self.theme = find_theme(self.themes, settings.theme)
        self.transformer = MarkupTransformer(
            line_number=settings.line_number, grammars=grammars
        )
        logger.info(
            "prism plugin ready: theme=%s mode=%s line_number=%s",
            self.theme.name, settings.mode, settings.line_number,
        )

    @classmethod
    def from_config_file(cls, path: str | Path, **kwargs: Any) -> PrismPlugin:
        return cls(load_settings(path), **kwargs)

    @property
    def line_number(self) -> bool:
        """Current line-number default, including block overrides seen so far."""
        return self.transformer.line_number

    def after_post_render(self, data: dict[str, Any]) -> dict[str, Any]:
        data["content"] = self.transformer.transform(data["content"])
        return data

    def generate_assets(self) -> list[Asset]:
        return collect_assets(
            self.theme,
            custom_css=self.settings.custom_css_path,
            line_number=self.line_number,
            realtime=self.settings.realtime,
            script_dir=self.settings.script_dir,
        )

    def imports(self) -> str:
        return build_imports(
            self.settings.root,
            self.theme.filename,
            line_number=self.line_number,
            realtime=self.settings.realtime,
            custom_css=self.settings.custom_css,
        )

    def after_render_html(self, page: str) -> str:
        return inject_assets(page, self.imports())

    def register(self, host: Host) -> None:
        """Attach the filters (and, without custom CSS, the asset hooks)."""
        host.register_filter("after_post_render", self.after_post_render)
        if self.settings.manage_assets:
            host.register_generator("prism_assets", self.generate_assets)
            host.register_filter("after_render:html", self.after_render_html)
        else:
            logger.info("custom_css set, asset management disabled")
