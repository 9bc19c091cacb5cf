"""Entry-point for the save server and the console client."""
from __future__ import annotations

import argparse
import logging
import os
from typing import Dict, Sequence

import uvicorn

from bobidle.presentation.cli.app import main as cli_main
from bobidle.presentation.config import Settings, load_settings
from bobidle.presentation.web import build_app


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bobidle", description="Bobiverse idle economy.")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default INFO).")
    subparsers = parser.add_subparsers(dest="command", required=True)
    serve = subparsers.add_parser("serve", help="Run the HTTP save server.")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.add_argument("--db-path", default=None)
    play = subparsers.add_parser("play", help="Play in the console.")
    play.add_argument("--server-url", default=None, help="Save server base URL; local file if omitted.")
    play.add_argument("--db-path", default=None)
    return parser


def resolve_settings(args: argparse.Namespace) -> Settings:
    """Command-line flags take precedence over BOBIDLE_* variables and the config file."""
    environ: Dict[str, str] = dict(os.environ)
    flags = {
        "BOBIDLE_HOST": getattr(args, "host", None),
        "BOBIDLE_PORT": getattr(args, "port", None),
        "BOBIDLE_DB_PATH": getattr(args, "db_path", None),
        "BOBIDLE_SERVER_URL": getattr(args, "server_url", None),
    }
    environ.update({key: str(value) for key, value in flags.items() if value is not None})
    return load_settings(environ=environ)


def main(argv: Sequence[str] | None = None) -> None:
    """Parse arguments and run the requested command."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = resolve_settings(args)
    if args.command == "serve":
        uvicorn.run(build_app(settings), host=settings.host, port=settings.port)
    else:
        cli_main(settings)


if __name__ == "__main__":
    main()
