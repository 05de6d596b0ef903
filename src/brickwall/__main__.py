"""Console entrypoint for the brickwall application.

Delegates to :mod:`brickwall.cli` so that ``python -m brickwall`` and the
installed ``brickwall`` console script run the same code.
"""

from __future__ import annotations

from brickwall.cli import main as cli_main


def main() -> None:
    cli_main()


if __name__ == "__main__":
    main()
