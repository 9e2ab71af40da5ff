#!/usr/bin/env python3
"""CLI for the plann.er API.

Usage:
    python -m cli <command>

Commands:
    serve                        Run the HTTP server on port 8080
    migrate [upgrade [target]]   Apply migrations (default: head)
    migrate downgrade [target]   Revert migrations (default: -1)
    migrate current | history    Show the applied revision or the history
"""

import argparse
import sys
from pathlib import Path

from alembic.config import Config

from core.logger import configure_logging, get_logger

logger = get_logger(__name__)

API_DIR = Path(__file__).resolve().parent

_DEFAULT_TARGETS = {"upgrade": "head", "downgrade": "-1"}


def cmd_serve() -> int:
    """Run the API under uvicorn.

    uvicorn installs the SIGINT/SIGTERM handlers: on a signal it stops
    accepting connections, gives in-flight requests up to the grace period,
    then runs the lifespan shutdown which closes the connection pool.
    """
    import uvicorn

    from core.config import (
        SERVER_HOST,
        SERVER_IDLE_TIMEOUT_SECONDS,
        SERVER_PORT,
        SERVER_SHUTDOWN_GRACE_SECONDS,
    )

    config = uvicorn.Config(
        "main:app",
        host=SERVER_HOST,
        port=SERVER_PORT,
        lifespan="on",
        timeout_keep_alive=SERVER_IDLE_TIMEOUT_SECONDS,
        timeout_graceful_shutdown=SERVER_SHUTDOWN_GRACE_SECONDS,
        log_config=None,
    )
    server = uvicorn.Server(config)

    try:
        server.run()
    except Exception:
        logger.exception("server.failed")
        return 1

    if not server.started:
        logger.error("server.startup.failed")
        return 1

    logger.info("server.stopped")
    return 0


def get_alembic_config() -> Config:
    cfg = Config(str(API_DIR / "alembic.ini"))
    # Absolute so migrations run from any working directory.
    cfg.set_main_option("script_location", str(API_DIR / "alembic"))
    return cfg


def cmd_migrate(action: str = "upgrade", target: str | None = None) -> int:
    """Run an Alembic command against the configured database."""
    from alembic import command

    cfg = get_alembic_config()
    target = target or _DEFAULT_TARGETS.get(action)

    logger.info("migrations.running", action=action, target=target)
    match action:
        case "upgrade":
            command.upgrade(cfg, target)
        case "downgrade":
            command.downgrade(cfg, target)
        case "current":
            command.current(cfg)
        case "history":
            command.history(cfg)
        case _:
            raise ValueError(f"Unknown migrate action: {action}")
    logger.info("migrations.complete", action=action)
    return 0


def main() -> int:
    configure_logging()

    parser = argparse.ArgumentParser(
        description="plann.er API CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("serve", help="Run the HTTP server")

    migrate = subparsers.add_parser("migrate", help="Run database migrations")
    migrate.add_argument(
        "action",
        nargs="?",
        default="upgrade",
        choices=["upgrade", "downgrade", "current", "history"],
    )
    migrate.add_argument(
        "target",
        nargs="?",
        help="Target revision (upgrade: head, downgrade: -1)",
    )

    args = parser.parse_args()

    if args.command == "serve":
        return cmd_serve()
    elif args.command == "migrate":
        return cmd_migrate(args.action, args.target)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
