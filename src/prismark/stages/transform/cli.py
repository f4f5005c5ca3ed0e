"""CLI subcommand registration for the transform stage."""

from __future__ import annotations

import argparse
from typing import Any


def register(subparsers: argparse._SubParsersAction) -> None:
    """Register the ``transform`` subcommand and its sub-actions."""
    tr = subparsers.add_parser("transform", help="Resolve prism markers in rendered posts")
    tr_sub = tr.add_subparsers(dest="action")

    # --- transform render ---
    tr_render = tr_sub.add_parser("render", help="Highlight the code blocks of rendered posts")
    tr_render.add_argument("files", nargs="+", help="Rendered post HTML files, in build order")
    tr_render.add_argument(
        "--config",
        default="_config.yml",
        help="Site configuration file (default: _config.yml)",
    )

    # --- transform settings ---
    tr_settings = tr_sub.add_parser("settings", help="Decode a data-settings attribute value")
    tr_settings.add_argument("text", help="Escaped settings text")


def run(args: argparse.Namespace) -> dict[str, Any]:
    """Dispatch to the appropriate transform action."""
    from prismark.stages.transform import render, settings

    if args.action == "render":
        return render(args.config, args.files)

    if args.action == "settings":
        return settings(args.text)

    return {"error": f"Unknown transform action: {args.action}"}
