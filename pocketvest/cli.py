"""
CLI entry point for PocketVest.

Usage:
    # Serve the HTTP API
    python -m pocketvest serve --port 8000

    # Print one page of articles for a keyword query
    python -m pocketvest news crypto --page 2

    # List stored usernames
    python -m pocketvest users
"""

import argparse
import asyncio
import logging

from pocketvest.core.config import settings

logger = logging.getLogger(__name__)


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the FastAPI application with uvicorn."""
    import uvicorn

    from pocketvest.main import create_app

    logger.info("Starting PocketVest API at http://%s:%d", args.host, args.port)
    uvicorn.run(create_app(), host=args.host, port=args.port, reload=False)


def cmd_news(args: argparse.Namespace) -> None:
    """Fetch one page of articles and print a line per article."""
    from pocketvest.application.context import build_context

    async def run() -> None:
        ctx = build_context(settings)
        try:
            await ctx.news.fetch_page(args.query, args.page)
            for article in ctx.news.articles:
                print(f"{article.published_at:%Y-%m-%d}  {article.source:<24}  {article.title}")
            print(f"-- page {ctx.news.current_page}, {ctx.news.total_found} found")
            if ctx.news.alert_message:
                print(ctx.news.alert_message)
        finally:
            await ctx.aclose()

    asyncio.run(run())


def cmd_users(_args: argparse.Namespace) -> None:
    """List the usernames in the credential store."""
    from pocketvest.infrastructure.identity.json_credential_store import (
        JsonCredentialStore,
    )

    store = JsonCredentialStore(settings.get_credentials_path())
    for username in sorted(store.all_usernames()):
        print(username)


def main() -> None:
    from pocketvest.shared.logging import configure_logging

    configure_logging(level=settings.log_level)

    parser = argparse.ArgumentParser(description="PocketVest CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Serve the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.set_defaults(func=cmd_serve)

    news_parser = subparsers.add_parser("news", help="Fetch one page of articles")
    news_parser.add_argument("query", help="Keyword query")
    news_parser.add_argument("--page", type=int, default=1)
    news_parser.set_defaults(func=cmd_news)

    users_parser = subparsers.add_parser("users", help="List stored usernames")
    users_parser.set_defaults(func=cmd_users)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
