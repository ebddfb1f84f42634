"""Console-script entry point for easy-korean."""

from __future__ import annotations

import sys
from typing import Optional, Sequence, TextIO

from .args import parse_cli_args
from .commands import execute_command


def run_cli(argv: Optional[Sequence[str]] = None, *, out: Optional[TextIO] = None) -> int:
    """Parse ``argv`` and run the selected sub-command."""

    args = parse_cli_args(argv)
    return execute_command(args, out)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the easy-korean CLI."""

    return run_cli(argv)


if __name__ == "__main__":  # pragma: no cover - manual execution
    sys.exit(main())
