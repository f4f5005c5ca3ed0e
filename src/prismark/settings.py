"""Plugin settings resolved from the host site's configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from prismark.errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_KEY = "prism_plugin"
MODES = ("preprocess", "realtime")


@dataclass
class PluginSettings:
    """The ``prism_plugin`` block of the host configuration, plus ``root``."""

    theme: str = "default"
    mode: str = "preprocess"
    line_number: bool = False
    custom_css: str | None = None
    root: str = "/"
    base_dir: Path = field(default_factory=Path.cwd)
    theme_dirs: list[Path] = field(default_factory=list)
    script_dir: Path | None = None

    @property
    def realtime(self) -> bool:
        return self.mode == "realtime"

    @property
    def manage_assets(self) -> bool:
        """Assets are only generated and linked without a custom stylesheet."""
        return self.custom_css is None

    @property
    def custom_css_path(self) -> Path | None:
        if self.custom_css is None:
            return None
        return self.base_dir / self.custom_css

    @classmethod
    def from_host_config(
        cls, config: dict[str, Any], base_dir: str | Path | None = None
    ) -> PluginSettings:
        """Build settings from a host configuration mapping.

        Raises ConfigurationError when the ``prism_plugin`` block is missing
        or holds invalid values.
        """
        options = config.get(CONFIG_KEY)
        if not options or not isinstance(options, dict):
            raise ConfigurationError(
                f"`{CONFIG_KEY}` options should be added to _config.yml file"
            )

        base = Path(base_dir) if base_dir is not None else Path.cwd()
        mode = options.get("mode") or "preprocess"
        if mode not in MODES:
            raise ConfigurationError(
                f"Invalid mode {mode!r}, expected one of: {', '.join(MODES)}"
            )

        theme_dirs = options.get("theme_dirs") or []
        if isinstance(theme_dirs, str):
            theme_dirs = [theme_dirs]

        script_dir = options.get("script_dir")
        if mode == "realtime":
            if not script_dir:
                raise ConfigurationError(
                    "realtime mode needs `script_dir` pointing at prism.js "
                    "and prism-line-numbers.min.js"
                )
            if not (base / script_dir).is_dir():
                raise ConfigurationError(f"script_dir {script_dir} is not a directory")

        return cls(
            theme=options.get("theme") or "default",
            mode=mode,
            line_number=bool(options.get("line_number") or False),
            custom_css=options.get("custom_css") or None,
            root=config.get("root") or "/",
            base_dir=base,
            theme_dirs=[base / d for d in theme_dirs],
            script_dir=base / script_dir if script_dir else None,
        )


def load_host_config(path: str | Path) -> dict[str, Any]:
    """Load the host site's YAML configuration (``_config.yml``)."""
    p = Path(path)
    if not p.exists():
        raise ConfigurationError(f"Configuration file not found: {p}")
    try:
        data = yaml.safe_load(p.read_text())
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Cannot parse {p}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{p} does not hold a mapping")
    logger.debug("loaded host configuration from %s", p)
    return data


def load_settings(path: str | Path) -> PluginSettings:
    """Load settings from a config file; relative paths resolve next to it."""
    p = Path(path).resolve()
    return PluginSettings.from_host_config(load_host_config(p), base_dir=p.parent)
