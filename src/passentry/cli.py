"""CLI entrypoint to inspect one decrypted password entry read from stdin."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Optional, Sequence, TextIO

from passentry.core.models import OtpType
from passentry.core.parser import EntryParser
from passentry.core.settings import ParserSettings
from passentry.utils.logging import get_logger, set_level


logger = get_logger("EntryCLI")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Show username, notes and the current one-time password of an entry piped on stdin.",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to parser settings YAML")
    parser.add_argument(
        "--timestamp",
        type=float,
        default=None,
        help="Unix time in seconds to derive the TOTP code for (default: now)",
    )
    parser.add_argument("--show-password", action="store_true", help="Also print the password line")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    args = build_parser().parse_args(argv)
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    if args.verbose:
        set_level(logging.DEBUG)

    settings = None
    if args.config is not None:
        try:
            settings = ParserSettings.from_file(args.config)
        except (OSError, ValueError) as exc:
            logger.error("Unable to load parser settings from %s: %s", args.config, exc)
            return 2

    entry = EntryParser(settings=settings).parse(stdin.read())

    if args.show_password:
        print(f"password: {entry.password}", file=stdout)
    if entry.has_username():
        print(f"username: {entry.username}", file=stdout)
    notes = entry.extra_content_without_auth_data.rstrip("\n")
    if notes:
        print(notes, file=stdout)
    if not entry.has_totp():
        return 0

    timestamp = time.time() if args.timestamp is None else args.timestamp
    result = entry.calculate_code(timestamp)
    if not result.ok:
        logger.error("Code unavailable: %s", result.error)
        return 1

    params = entry.otp_parameters
    if params.type is OtpType.TOTP:
        print(f"otp: {result.code} (valid for {params.remaining_seconds(timestamp)}s)", file=stdout)
    else:
        print(f"otp: {result.code}", file=stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
