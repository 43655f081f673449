"""
Command line entry point for the tubesum API server.

    tubesum-api serve --port 8000 --reload
    tubesum-api init-db
"""

import argparse
import os

import uvicorn

from tubesum.config import config


def _serve(args: argparse.Namespace) -> None:
    print(f"Starting {config.APP_NAME} v{config.APP_VERSION} ({os.getenv('ENVIRONMENT', 'development')})")
    print(f"Database: {config.DATABASE_URL.split('@')[-1]}")
    print(f"Transcription provider: {config.TRANSCRIPTION_PROVIDER}")
    print(f"Listening on http://{args.host}:{args.port}")

    uvicorn.run(
        "tubesum.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=None if args.reload else args.workers,
        log_level=config.LOG_LEVEL.lower(),
    )


def _init_db(args: argparse.Namespace) -> None:
    from tubesum.db.database import init_db

    init_db()
    print(f"Tables created in {config.DATABASE_URL.split('@')[-1]}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tubesum-api", description="Transcribe and summarize YouTube videos")
    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="0.0.0.0", help="Host to bind the server to")
    serve.add_argument("--port", type=int, default=8000, help="Port to bind the server to")
    serve.add_argument("--workers", type=int, default=1, help="Number of worker processes")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve.set_defaults(handler=_serve)

    init = subparsers.add_parser("init-db", help="Create the database tables and exit")
    init.set_defaults(handler=_init_db)

    return parser


def main(argv=None):
    """Run the tubesum command line."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        # plain `tubesum-api` serves with the defaults
        args = parser.parse_args(["serve", *(argv or [])])

    config.initialize()
    args.handler(args)


if __name__ == "__main__":
    main()
