from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
import uvicorn

from kisskh.infrastructure.config import load_config
from kisskh.infrastructure.logging.setup import configure_logging
from kisskh.interfaces.app import create_app

log = structlog.get_logger(__name__)

# Stremio clients expect addons on 7000 unless told otherwise.
_DEFAULT_HOST = "0.0.0.0"
_DEFAULT_PORT = 7000

# argparse dest -> flat config key understood by load_config().
_CONFIG_FLAGS = {
    "log_level": "log_level",
    "log_format": "log_format",
    "site_url": "site_url",
    "server": "server",
}


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="kisskh", description="Serve the KissKH Stremio addon."
    )

    server = parser.add_argument_group("server")
    server.add_argument(
        "--host", help=f"Bind host (env HOST, default {_DEFAULT_HOST})."
    )
    server.add_argument(
        "--port", type=int, help=f"Bind port (env PORT, default {_DEFAULT_PORT})."
    )

    files = parser.add_argument_group("config files")
    files.add_argument("--config", type=Path, help="YAML config file.")
    files.add_argument("--dotenv", type=Path, help=".env file with KISSKH_* vars.")

    overrides = parser.add_argument_group("overrides")
    overrides.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    overrides.add_argument("--log-format", choices=["json", "console"])
    overrides.add_argument("--site-url", help="KissKH mirror to scrape.")
    overrides.add_argument("--server", help="Episode server selector, e.g. 02.")

    return parser.parse_args(argv)


def build_cli_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Flat config overrides for the flags that were given."""
    return {
        key: getattr(args, dest)
        for dest, key in _CONFIG_FLAGS.items()
        if getattr(args, dest) is not None
    }


def _bind_address(args: argparse.Namespace) -> tuple[str, int]:
    host = args.host or os.getenv("HOST") or _DEFAULT_HOST
    port = args.port or int(os.getenv("PORT") or _DEFAULT_PORT)
    return host, port


def start(argv: Iterable[str] | None = None) -> None:
    """Console entrypoint: load config once, set up logging, serve the addon."""
    args = _parse_args(sys.argv[1:] if argv is None else argv)

    config = load_config(
        config_path=args.config,
        dotenv_path=args.dotenv,
        cli_overrides=build_cli_overrides(args),
    )
    log_config = configure_logging(config)

    host, port = _bind_address(args)
    log.info(
        "addon_starting",
        host=host,
        port=port,
        site=config.kisskh.base_url,
        environment=config.environment,
    )

    uvicorn.run(create_app(config), host=host, port=port, log_config=log_config)


if __name__ == "__main__":
    raise SystemExit(start())
