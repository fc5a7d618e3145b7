#!/usr/bin/env python3
"""
Command-line interface for a running URL shortener service.

Usage:
    python shortlinks_cli.py shorten <url> [--validity MINUTES] [--custom-code CODE]
    python shortlinks_cli.py resolve <short_code>
    python shortlinks_cli.py stats <short_code>
    python shortlinks_cli.py summary
    python shortlinks_cli.py health
"""

import argparse
import asyncio
import json
import sys
import os
from typing import Any, Optional

import httpx

# Add parent directories to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from shortlinks.common.logging_config import setup_logging


class URLShortenerCLI:
    """Command-line client for the URL shortener HTTP API."""

    def __init__(
        self,
        server_url: str,
        verbose: bool = False,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize CLI.

        Args:
            server_url: Base URL of the running service
            verbose: Enable debug logging
            client: Optional preconfigured HTTP client
        """
        self.server_url = server_url.rstrip("/")
        self.verbose = verbose
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.client = client
        self._owns_client = client is None

    async def initialize(self):
        """Open the HTTP client."""
        if self.client is None:
            self.client = httpx.AsyncClient(base_url=self.server_url, timeout=10.0)
        self.logger.debug(f"Using service at {self.server_url}")

    async def cleanup(self):
        """Cleanup resources."""
        if self.client is not None and self._owns_client:
            await self.client.aclose()

    def _print(self, payload: Any, error: bool = False) -> int:
        print(json.dumps(payload, indent=2), file=sys.stderr if error else sys.stdout)
        return 1 if error else 0

    async def _call(self, method: str, path: str, **kwargs) -> int:
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            return self._print({"success": False, "error": f"Request failed: {e}"}, error=True)

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = {"message": response.text}
            return self._print(
                {"success": False, "status": response.status_code, **body},
                error=True,
            )

        return self._print({"success": True, **response.json()})

    async def shorten(
        self,
        url: str,
        validity: Optional[int] = None,
        custom_code: Optional[str] = None,
    ):
        """Shorten a URL."""
        body = {"url": url}
        if validity is not None:
            body["validity"] = validity
        if custom_code:
            body["shortcode"] = custom_code
        return await self._call("POST", "/shorturls", json=body)

    async def resolve(self, short_code: str):
        """Follow a short code without leaving the terminal.

        This counts as a click.
        """
        try:
            response = await self.client.get(f"/shorturls/{short_code}", follow_redirects=False)
        except httpx.HTTPError as e:
            return self._print({"success": False, "error": f"Request failed: {e}"}, error=True)

        if response.is_redirect:
            return self._print({
                "success": True,
                "short_code": short_code,
                "original_url": response.headers["location"],
            })

        return self._print(
            {"success": False, "status": response.status_code, **response.json()},
            error=True,
        )

    async def stats(self, short_code: str):
        """Show click statistics for a short code."""
        return await self._call("GET", f"/shorturls/{short_code}/stats")

    async def summary(self):
        """Show service-wide statistics."""
        return await self._call("GET", "/shorturls/stats/summary")

    async def health(self):
        """Check service health."""
        return await self._call("GET", "/health")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="URL shortener command-line client")
    parser.add_argument(
        "--server",
        default=os.getenv("SHORTLINKS_SERVER", "http://localhost:3000"),
        help="Base URL of the running service",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", required=True)

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")
    shorten_parser.add_argument("--validity", type=int, help="Validity in minutes")
    shorten_parser.add_argument("--custom-code", help="Custom short code")

    resolve_parser = subparsers.add_parser("resolve", help="Resolve a short code")
    resolve_parser.add_argument("short_code", help="Short code")

    stats_parser = subparsers.add_parser("stats", help="Click statistics for a short code")
    stats_parser.add_argument("short_code", help="Short code")

    subparsers.add_parser("summary", help="Service-wide statistics")
    subparsers.add_parser("health", help="Check service health")

    return parser


async def run(args: argparse.Namespace, client: Optional[httpx.AsyncClient] = None) -> int:
    """Execute the parsed command and return the exit code."""
    cli = URLShortenerCLI(args.server, verbose=args.verbose, client=client)
    await cli.initialize()

    try:
        if args.command == "shorten":
            return await cli.shorten(args.url, args.validity, args.custom_code)
        if args.command == "resolve":
            return await cli.resolve(args.short_code)
        if args.command == "stats":
            return await cli.stats(args.short_code)
        if args.command == "summary":
            return await cli.summary()
        return await cli.health()
    finally:
        await cli.cleanup()


def main():
    """Main entry point."""
    args = build_parser().parse_args()
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
