"""Command line interface for Landing Resolver."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

import typer

from .config import load_config, validate_timeout
from .errors import ConfigError
from .logging_utils import configure_logging
from .resolver import RedirectResolver

logger = logging.getLogger(__name__)

app = typer.Typer(help="Follow http(s) redirects to the final landing URL", add_completion=False)


@app.command()
def resolve(
    urls: List[str] = typer.Argument(..., help="One or more URLs to resolve"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Maximum number of redirects to follow"),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", "-t", help="Overall timeout in seconds per URL (0 disables)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", "--debug", "-d", help="Log every hop to stderr"),
    user_agent: Optional[str] = typer.Option(None, "--user-agent", help="Override the browser User-Agent"),
    concurrency: Optional[int] = typer.Option(None, "--concurrency", min=1, help="URLs resolved at once"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Optional log file path"),
) -> None:
    """Print the final URL for each input, one per line."""

    try:
        config = load_config()
        if limit is not None:
            config.max_hops = limit
        if timeout is not None:
            validate_timeout(timeout)
            config.timeout = timeout
        if user_agent:
            config.user_agent = user_agent
        if concurrency:
            config.concurrency = concurrency
    except ConfigError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=2)

    config.verbose = verbose or config.verbose
    configure_logging(log_file, verbose=config.verbose)
    logger.debug("Resolving %s url(s) with limit %s, timeout %s", len(urls), config.max_hops, config.timeout)

    resolver = RedirectResolver(config=config)
    results = asyncio.run(resolver.resolve_many(urls))

    failed = 0
    for result in results:
        if result.ok:
            typer.echo(result.url)
        else:
            failed += 1
            typer.echo(f"error: {result.start_url}: {result.error}", err=True)

    if failed:
        raise typer.Exit(code=1)


def main() -> None:
    app(prog_name="landing-resolver")


if __name__ == "__main__":
    main()
