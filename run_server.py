#!/usr/bin/env python3
"""
Taskboard API Server Runner

Starts the Taskboard REST API with uvicorn.

Usage:
    python run_server.py [--host HOST] [--port PORT] [--database-url URL] [--drop-db]

Options:
    --host HOST          Interface to bind (default: SERVER_HOST or 0.0.0.0)
    --port PORT          Port to listen on (default: SERVER_PORT or 5000)
    --database-url URL   SQLAlchemy URL (default: DATABASE_URL or sqlite:///data/taskboard.db)
    --drop-db            Drop all tables before starting
    --log-level LEVEL    DEBUG, INFO, WARNING or ERROR
"""

import argparse
import logging
import sys

import uvicorn
from dotenv import load_dotenv

from taskboard.api.server import create_app
from taskboard.c1_database_session.database_manager import DatabaseManager
from taskboard.core.config import get_settings
from taskboard.core.logging_setup import setup_logging

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger("taskboard.run_server")


def main():
    """Run the Taskboard API."""
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Run the Taskboard API server")
    parser.add_argument("--host", type=str, default=settings.server.host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=settings.server.port, help="Port to listen on")
    parser.add_argument(
        "--database-url",
        type=str,
        default=settings.database.url,
        help="SQLAlchemy database URL",
    )
    parser.add_argument(
        "--drop-db",
        action="store_true",
        help="Drop all tables before starting",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console log level",
    )
    args = parser.parse_args()

    setup_logging(args.log_level, settings.log_dir)

    if settings.auth.secret_key.get_secret_value() == "CHANGE_ME_IN_PRODUCTION":
        logger.warning("AUTH_SECRET_KEY is not set; tokens are signed with the default secret")

    db_manager = DatabaseManager(args.database_url, echo=settings.database.echo)
    if args.drop_db:
        logger.info("Dropping all tables")
        db_manager.drop_tables()

    app = create_app(settings, db_manager)

    logger.info(f"Starting Taskboard API on {args.host}:{args.port}")
    try:
        uvicorn.run(app, host=args.host, port=args.port, log_config=None)
    except KeyboardInterrupt:
        logger.info("Interrupted")
        sys.exit(0)


if __name__ == "__main__":
    main()
