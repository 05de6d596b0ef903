"""Command-line interface for Brickwall.

Parsing lives in :mod:`brickwall.app.wall_view` so the console script,
``python -m brickwall`` and the app module share one set of flags.
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from brickwall import __version__
from brickwall.app import wall_view
from brickwall.config import make_wall_config


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return wall_view.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Synchronous entrypoint for the Brickwall CLI."""
    args = parse_args(argv)

    if args.version:
        print(f"Brickwall {__version__}")
        return

    logging.basicConfig(level=args.log_level)
    if args.headless:
        wall_view.render_headless(make_wall_config(args=args), args.out)
        print(f"wrote {args.out}")
        return

    try:
        asyncio.run(wall_view.main_async(args))
    except KeyboardInterrupt:
        # Allow graceful cancellation via Ctrl+C
        pass


if __name__ == "__main__":
    main()
