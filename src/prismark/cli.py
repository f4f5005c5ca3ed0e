"""CLI entry point for prismark."""

from __future__ import annotations

import argparse
import importlib
import json
import logging
import sys

from prismark import __version__
from prismark.errors import PrismarkError


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="prismark",
        description="Prism-style syntax highlighting for rendered HTML",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    # --- Register stage subcommands ---
    from prismark.stages.transform.cli import register as register_transform
    from prismark.stages.assets.cli import register as register_assets

    register_transform(sub)
    register_assets(sub)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 1

    stage_dispatch = {
        "transform": "prismark.stages.transform.cli",
        "assets": "prismark.stages.assets.cli",
    }

    if args.command in stage_dispatch:
        if not getattr(args, "action", None):
            # Re-parse to show stage-specific help
            parser.parse_args([args.command, "--help"])
            return 1

        cli_mod = importlib.import_module(stage_dispatch[args.command])
        try:
            result = cli_mod.run(args)
        except (PrismarkError, OSError) as e:
            print(f"prismark: {e}", file=sys.stderr)
            return 2
        json.dump(result, sys.stdout, indent=2)
        print()
        return 0

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
