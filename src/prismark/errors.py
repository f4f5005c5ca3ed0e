"""Shared exception classes for prismark."""

from __future__ import annotations


class PrismarkError(Exception):
    """Base class for every error raised by prismark."""


class ConfigurationError(PrismarkError):
    """Raised when the ``prism_plugin`` configuration is missing or invalid."""


class InvalidThemeError(ConfigurationError):
    """Raised when the configured theme is not among the discovered themes."""

    def __init__(self, name: str, valid: list[str]) -> None:
        self.name = name
        self.valid = valid
        super().__init__(
            f"Invalid theme {name}. Valid Themes: \n" + "\n".join(valid)
        )


class SettingsParseError(PrismarkError, ValueError):
    """Raised when a marker's ``data-settings`` attribute is not a JSON object."""

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        super().__init__(f"Invalid prism settings {text!r}: {reason}")
