"""Main entry point for Dialectic."""

import argparse
import asyncio
import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from dialectic.api import create_fastapi_app
from dialectic.config import DEFAULT_API_HOST, DEFAULT_API_PORT, get_api_url
from dialectic.console import run_console
from dialectic.logging_config import setup_logging


def serve() -> None:
    """Run the API server."""
    setup_logging()

    api_host = os.getenv("API_HOST", DEFAULT_API_HOST)
    api_port = int(os.getenv("API_PORT", str(DEFAULT_API_PORT)))

    app = create_fastapi_app()

    uvicorn.run(
        app,
        host=api_host,
        port=api_port,
        log_level="info",
    )


def chat(api_url: str | None) -> None:
    """Run the terminal console against a running server."""
    setup_logging(console=False)
    asyncio.run(run_console(api_url or get_api_url()))


def main():
    """Run the application."""
    project_root = Path(__file__).resolve().parent
    load_dotenv(project_root / ".env")

    parser = argparse.ArgumentParser(description="Dialectic: two perspectives on every idea")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("serve", help="run the API server (default)")
    chat_parser = subparsers.add_parser("chat", help="talk to a running server from the terminal")
    chat_parser.add_argument("--api-url", help="server base URL (default: DIALECTIC_API_URL)")
    args = parser.parse_args()

    if args.command == "chat":
        chat(args.api_url)
    else:
        serve()


if __name__ == "__main__":
    main()
