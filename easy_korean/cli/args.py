"""Argument parsing helpers for the easy-korean CLI."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence


def _add_shared_arguments(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    parser.add_argument(
        "--config",
        default=None,
        help=(
            "Path to a configuration override JSON file (defaults to conf/config.local.json "
            "if present)."
        ),
    )
    parser.add_argument("--storage-path", help="Override the JSON file holding cached entries.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging output.")
    return parser


def _add_language_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-l",
        "--language",
        help="Language for definitions and translations (defaults to the saved preference).",
    )


def _add_image_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--images",
        action="store_true",
        help="Generate word and cultural illustrations for the entry.",
    )


def build_cli_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="easy-korean",
        description="Look up Korean words with Gemini.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    lookup_parser = subparsers.add_parser("lookup", help="Look up a word, phrase or short sentence.")
    _add_shared_arguments(lookup_parser)
    lookup_parser.add_argument("query", help="Korean text or a word in any language.")
    _add_language_argument(lookup_parser)
    _add_image_argument(lookup_parser)

    daily_parser = subparsers.add_parser("daily", help="Show a random beginner word of the day.")
    _add_shared_arguments(daily_parser)
    _add_language_argument(daily_parser)
    _add_image_argument(daily_parser)

    language_parser = subparsers.add_parser("language", help="Show or change the saved language.")
    _add_shared_arguments(language_parser)
    language_parser.add_argument("new_language", nargs="?", help="Language to save as the preference.")
    language_parser.add_argument(
        "--list",
        action="store_true",
        dest="list_languages",
        help="List the languages offered by the selector.",
    )

    speak_parser = subparsers.add_parser("speak", help="Synthesize Korean speech to an audio file.")
    _add_shared_arguments(speak_parser)
    speak_parser.add_argument("text", help="Korean text to pronounce.")
    speak_parser.add_argument("-o", "--output", required=True, help="Destination audio file.")
    speak_parser.add_argument(
        "--backend",
        choices=["native", "gemini", "gtts"],
        help="Override the configured speech backend.",
    )

    return parser


def parse_cli_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse ``argv`` into a namespace with a ``command`` attribute."""

    return build_cli_parser().parse_args(argv)


__all__ = ["build_cli_parser", "parse_cli_args"]
