"""Command-line front end for the converters.

    chatkit render-card card.json --platform discord
    chatkit render-modal modal.json --context-id C1:1700000000.0001
    chatkit convert --from slack --to discord "*hi* <@U123>"
    chatkit plain --platform slack "~gone~ _soon_"

JSON input may be a file path or ``-`` for stdin.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from .config import settings
from .messaging.elements import Card, Modal
from .platforms import PLATFORMS, convert, get_card_renderer, get_codec, get_modal_renderer

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def _load_json(source: str) -> Any:
    raw = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    return json.loads(raw)


def _text_arg(value: str | None) -> str:
    return sys.stdin.read() if value in (None, "-") else value


def _cmd_render_card(args: argparse.Namespace) -> int:
    card = Card.model_validate(_load_json(args.file))
    renderer = get_card_renderer(args.platform)
    if args.fallback:
        console.print(renderer.render_fallback(card), markup=False, highlight=False, soft_wrap=True)
    else:
        console.print_json(data=renderer.to_payload(card))
    return 0


def _cmd_render_modal(args: argparse.Namespace) -> int:
    modal = Modal.model_validate(_load_json(args.file))
    render = get_modal_renderer(args.platform)
    console.print_json(data=render(modal, args.context_id, args.message_id))
    return 0


def _cmd_convert(args: argparse.Namespace) -> int:
    text = _text_arg(args.text)
    if args.source == "markdown":
        result = get_codec(args.target).from_markdown(text)
    elif args.target == "markdown":
        result = get_codec(args.source).to_markdown(text)
    else:
        result = convert(text, args.source, args.target)
    console.print(result, markup=False, highlight=False, soft_wrap=True)
    return 0


def _cmd_plain(args: argparse.Namespace) -> int:
    text = _text_arg(args.text)
    console.print(get_codec(args.platform).extract_plain_text(text), markup=False, highlight=False, soft_wrap=True)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chatkit",
        description="Convert chat formatting, cards and modals between platforms.",
    )
    parser.add_argument("--log-level", default=None, help="Override CHATKIT_LOG_LEVEL.")
    sub = parser.add_subparsers(dest="command", required=True)

    card = sub.add_parser("render-card", help="Render a card JSON document for one platform.")
    card.add_argument("file", help="Card JSON file, or - for stdin.")
    card.add_argument("--platform", choices=PLATFORMS, default="slack")
    card.add_argument("--fallback", action="store_true", help="Print only the fallback text.")
    card.set_defaults(func=_cmd_render_card)

    modal = sub.add_parser("render-modal", help="Render a modal JSON document as a Slack view.")
    modal.add_argument("file", help="Modal JSON file, or - for stdin.")
    modal.add_argument("--platform", default="slack")
    modal.add_argument("--context-id", default=None)
    modal.add_argument("--message-id", default=None)
    modal.set_defaults(func=_cmd_render_modal)

    dialects = (*PLATFORMS, "markdown")
    conv = sub.add_parser("convert", help="Translate text between platform dialects.")
    conv.add_argument("text", nargs="?", help="Text to convert (default: stdin).")
    conv.add_argument("--from", dest="source", choices=dialects, required=True)
    conv.add_argument("--to", dest="target", choices=dialects, required=True)
    conv.set_defaults(func=_cmd_convert)

    plain = sub.add_parser("plain", help="Strip all formatting from platform text.")
    plain.add_argument("text", nargs="?", help="Text to strip (default: stdin).")
    plain.add_argument("--platform", choices=PLATFORMS, default="slack")
    plain.set_defaults(func=_cmd_plain)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=(args.log_level or settings.cfg.log_level).upper(),
        format="%(asctime)s  %(name)s  %(levelname)s  %(message)s",
    )
    if args.command == "convert" and args.source == args.target == "markdown":
        err_console.print("[red]--from and --to cannot both be markdown[/red]")
        return 2
    try:
        return args.func(args)
    except (OSError, ValueError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        err_console.print(f"[red]error:[/red] {escape(str(exc))}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
