from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from rokucast.application.app_state import AppState
from rokucast.domain.entities.commands import command_to_dict
from rokucast.domain.entities.content import RokuContent
from rokucast.domain.entities.playback import PlaybackError
from rokucast.domain.entities.search import SearchError, SearchQuery
from rokucast.domain.plugins import PluginError
from rokucast.infrastructure.composition import lifespan
from rokucast.infrastructure.config import AppConfig, load_config
from rokucast.infrastructure.logging.setup import configure_logging

log = structlog.get_logger(__name__)

PLAYBACK_NOT_CONFIRMED = "Playback could not be confirmed to start"


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="rokucast",
        description="Play library content and search streaming channels on a Roku.",
    )

    # Config wiring flags (no business logic)
    parser.add_argument("--config", default=None, help="Path to YAML config file.")
    parser.add_argument("--dotenv", default=None, help="Path to .env file.")
    parser.add_argument(
        "--device",
        default=None,
        help="Roku device IP (overrides roku.device_ip).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override log level.",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "console"],
        help="Override log format.",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    play = sub.add_parser("play", help="Play content on the device.")
    source = play.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--content",
        help="Content record as JSON (camelCase or snake_case keys).",
    )
    source.add_argument("--file", help="Path to a JSON file with the content record.")
    source.add_argument(
        "--url",
        help="Streaming URL; resolved through the channels' URL extractors.",
    )
    play.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the playback command without sending it.",
    )

    search = sub.add_parser("search", help="Search all plugins.")
    search.add_argument("query")
    search.add_argument("--limit", type=int, default=None)
    search.add_argument("--plugin", default=None, help="Only search this plugin.")

    extract = sub.add_parser("extract", help="Map a streaming URL to content.")
    extract.add_argument("url")
    extract.add_argument("--title", default=None, help="Page title hint.")

    sub.add_parser("channels", help="List configured channels.")
    sub.add_parser("device-info", help="Show the device's ECP device-info.")
    sub.add_parser("apps", help="List channels installed on the device.")

    return parser.parse_args(argv)


def _print_json(payload: Any) -> None:
    sys.stdout.write(json.dumps(payload, indent=2, ensure_ascii=False) + "\n")


def _load_content(args: argparse.Namespace, state: AppState) -> RokuContent:
    if args.url:
        content = state.roku.extract_from_url(args.url)
        if content is None:
            raise PluginError(f"No channel recognizes URL: {args.url}")
        return content
    if args.file:
        raw = Path(args.file).read_text(encoding="utf-8")
    else:
        raw = args.content
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("Content JSON must be an object")
    return RokuContent.from_dict(data)


async def _run(args: argparse.Namespace, config: AppConfig) -> int:
    async with lifespan(config) as state:
        if args.command == "play":
            content = _load_content(args, state)
            command = await state.play.execute(content, dry_run=args.dry_run)
            _print_json(
                {
                    "status": "dry_run" if args.dry_run else "sent",
                    "content": content.to_dict(),
                    "command": command_to_dict(command),
                }
            )
        elif args.command == "search":
            response = await state.search_all.execute(
                SearchQuery(query=args.query, limit=args.limit, plugin_name=args.plugin)
            )
            _print_json(
                {
                    "query": response.query,
                    "totalResults": response.total_results,
                    "results": [r.to_dict() for r in response.results],
                }
            )
        elif args.command == "extract":
            content = state.roku.extract_from_url(args.url, args.title)
            _print_json(content.to_dict() if content is not None else None)
        elif args.command == "channels":
            _print_json(
                [
                    {
                        "channelId": c.channel_id,
                        "channelName": c.channel_name,
                        "searchUrl": c.search_url,
                    }
                    for c in state.channel_info.execute()
                ]
            )
        elif args.command == "device-info":
            _print_json(await state.roku.device_info())
        elif args.command == "apps":
            _print_json(await state.roku.apps())
        else:
            raise ValueError(f"Unknown command: {args.command}")
    return 0


def start(argv: Iterable[str] | None = None) -> int:
    """
    Process entrypoint.

    Loads config exactly once, configures logging, then runs one command.
    Configuration, input and domain failures are reported as
    ``{"error": ...}`` on stderr with exit code 1.
    """

    if argv is None:
        argv = sys.argv[1:]

    args = _parse_args(argv)

    config_path = Path(args.config) if args.config else None
    dotenv_path = Path(args.dotenv) if args.dotenv else None

    cli_overrides: dict[str, Any] = {}
    if args.device:
        cli_overrides["roku_device_ip"] = args.device
    if args.log_level:
        cli_overrides["log_level"] = args.log_level
    if args.log_format:
        cli_overrides["log_format"] = args.log_format

    try:
        config = load_config(
            config_path=config_path,
            dotenv_path=dotenv_path,
            cli_overrides=cli_overrides,
        )
    except (OSError, ValidationError, ValueError) as exc:
        # Logging is not configured yet: report on stderr only.
        sys.stderr.write(
            json.dumps({"error": "Invalid configuration", "detail": str(exc)}) + "\n"
        )
        return 1

    configure_logging(config)

    try:
        return asyncio.run(_run(args, config))
    except PlaybackError as exc:
        # ECP has no feedback channel: a failed step only tells us playback
        # may not have started.
        log.error("playback_failed", command=args.command, error=str(exc))
        sys.stderr.write(
            json.dumps({"error": PLAYBACK_NOT_CONFIRMED, "detail": str(exc)}) + "\n"
        )
        return 1
    except (PluginError, SearchError, OSError, ValueError) as exc:
        log.error("command_failed", command=args.command, error=str(exc))
        sys.stderr.write(json.dumps({"error": str(exc)}) + "\n")
        return 1


if __name__ == "__main__":
    raise SystemExit(start())
