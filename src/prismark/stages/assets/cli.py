"""CLI subcommand registration for the assets stage."""

from __future__ import annotations

import argparse
from typing import Any


def _add_config(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default="_config.yml",
        help="Site configuration file (default: _config.yml)",
    )


def register(subparsers: argparse._SubParsersAction) -> None:
    """Register the ``assets`` subcommand and its sub-actions."""
    assets = subparsers.add_parser("assets", help="Theme stylesheets, scripts and head links")
    assets_sub = assets.add_subparsers(dest="action")

    # --- assets themes ---
    at = assets_sub.add_parser("themes", help="List available themes")
    _add_config(at)

    # --- assets generate ---
    ag = assets_sub.add_parser("generate", help="Copy assets into the public directory")
    ag.add_argument("public_dir", help="Public output directory")
    _add_config(ag)

    # --- assets inject ---
    ai = assets_sub.add_parser("inject", help="Link the assets from a rendered page")
    ai.add_argument("file", help="Rendered HTML page")
    ai.add_argument("--in-place", action="store_true", help="Rewrite the page file")
    _add_config(ai)


def run(args: argparse.Namespace) -> dict[str, Any]:
    """Dispatch to the appropriate assets action."""
    from prismark.stages.assets import themes, generate, inject

    if args.action == "themes":
        return themes(args.config)

    if args.action == "generate":
        return generate(args.config, args.public_dir)

    if args.action == "inject":
        return inject(args.config, args.file, in_place=args.in_place)

    return {"error": f"Unknown assets action: {args.action}"}
