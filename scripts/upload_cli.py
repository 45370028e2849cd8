#!/usr/bin/env python3
"""Command line utilities for uploadhandler."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

sys.path.append(".")

from rich.text import Text

from scripts._console_utils import get_console, result_label
from uploadhandler.configs.logging_config import setup_logging
from uploadhandler.handler import get_upload_handler

SENSITIVE_TOKENS = ("secret", "password", "token", "key")

console = get_console()


def _redact_config(values: dict[str, Any]) -> dict[str, Any]:
    """Mask sensitive fields before printing configuration."""
    redacted: dict[str, Any] = {}
    for key, value in values.items():
        lowered = key.lower()
        if isinstance(value, str) and any(
            token in lowered for token in SENSITIVE_TOKENS
        ):
            redacted[key] = "*****"
        else:
            redacted[key] = value
    return redacted


def cmd_handlers(args: argparse.Namespace) -> None:
    handler = get_upload_handler()
    names = handler.handler_names()
    if not names:
        console.print("[dim]No upload handlers configured.[/]")
        return

    for name in names:
        definition = handler.handlers[name]
        console.print(
            Text.assemble(
                Text(name, style="bold cyan"),
                Text(" -> ", style="dim"),
                Text(definition.provider, style="white"),
            )
        )
        if args.verbose:
            console.print_json(data=_redact_config(definition.config), sort_keys=True)


def cmd_upload(args: argparse.Namespace) -> None:
    handler = get_upload_handler()
    sources = [Path(p).expanduser() for p in args.files]

    try:
        results = handler.handle(args.handler, sources)
    except Exception as exc:  # noqa: BLE001
        console.print(f"[bold red]Upload failed:[/] {exc}")
        sys.exit(1)

    failed = [r for r in results if r.was_error()]

    if args.json:
        console.print_json(
            data={
                "handler": args.handler,
                "results": [r.to_dict() for r in results],
            },
            sort_keys=True,
            default=str,
        )
    else:
        for source, result in zip(sources, results, strict=True):
            if result.was_successful():
                target = result.url or result.new_name or ""
                line = Text.assemble(
                    result_label(True),
                    Text(" "),
                    Text(str(source), style="white"),
                    Text(" -> ", style="dim"),
                    Text(target, style="bold blue"),
                )
            else:
                line = Text.assemble(
                    result_label(False),
                    Text(" "),
                    Text(str(source), style="white"),
                    Text(f" {result.get_error_message()}", style="red"),
                )
            console.print(line)
        if failed:
            console.print(f"[bold red]{len(failed)} upload(s) failed.[/]")

    if failed:
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="uploadhandler CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/upload_cli.py handlers --verbose
  python scripts/upload_cli.py upload avatars ./photo.png
  python scripts/upload_cli.py upload documents a.pdf b.pdf --json
        """,
    )
    parser.add_argument(
        "--log-level", default=None, help="Override LOG_LEVEL for this run"
    )
    sub = parser.add_subparsers(dest="command")

    handlers_parser = sub.add_parser("handlers", help="List configured handlers")
    handlers_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Also print each handler's (redacted) configuration",
    )
    handlers_parser.set_defaults(func=cmd_handlers)

    upload_parser = sub.add_parser(
        "upload", help="Upload local files through a handler"
    )
    upload_parser.add_argument("handler", help="Handler name")
    upload_parser.add_argument("files", nargs="+", help="Local file paths to upload")
    upload_parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON instead of human-readable text",
    )
    upload_parser.set_defaults(func=cmd_upload)

    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    if not getattr(args, "command", None):
        parser.print_help()
        return
    setup_logging(log_level=args.log_level)
    args.func(args)


if __name__ == "__main__":
    main()
