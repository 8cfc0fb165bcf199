#!/usr/bin/env python3
"""
Command-line interface for the tldwhois server.
"""

import asyncio
import dataclasses
import json
import logging
import sys

import anyio
import click
import structlog

from tldwhois.config import Config
from tldwhois.exceptions import RegistryError
from tldwhois.server import WhoisServer
from tldwhois.services.registry_service import create_registry
from tldwhois.utils.validators import DomainValidator

logger = structlog.get_logger(__name__)


def configure_logging(level: str) -> None:
    """Configure structlog to render to stderr at the given level."""
    logging.basicConfig(
        stream=sys.stderr, level=getattr(logging, level, logging.INFO), force=True
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """tldwhois server CLI tool."""
    # Ensure that ctx.obj exists and is a dict
    ctx.ensure_object(dict)

    try:
        config = Config.from_env()
    except ValueError as e:
        click.echo(f"✗ Invalid configuration: {e}", err=True)
        sys.exit(1)
    if verbose:
        config = dataclasses.replace(config, log_level="DEBUG")
    ctx.obj["config"] = config


@cli.command()
@click.option("--host", default=None, help="Bind address (default: from config)")
@click.option("--port", default=None, type=int, help="Bind port (default: from config)")
@click.option(
    "--records",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Serve records from a JSON file instead of the registry database",
)
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, records: str) -> None:
    """Run the WHOIS server."""
    config = ctx.obj["config"]

    overrides = {}
    if host is not None:
        overrides["bind_host"] = host
    if port is not None:
        overrides["bind_port"] = port
    if overrides:
        config = dataclasses.replace(config, **overrides)

    configure_logging(config.log_level)

    try:
        config.validate()
    except ValueError as e:
        logger.error("Invalid configuration", error=str(e))
        sys.exit(1)

    async def run_server() -> None:
        registry = create_registry(config, records)
        server = WhoisServer(config, registry)
        await server.run()

    try:
        asyncio.run(run_server())
    except RegistryError as e:
        logger.error("Registry unavailable", error=e.to_dict())
        sys.exit(1)
    except OSError as e:
        logger.error(
            "Failed to start listener",
            host=config.bind_host,
            port=config.bind_port,
            error=str(e),
        )
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Server stopped")


@cli.command()
@click.argument("query")
@click.option(
    "--output",
    "-o",
    type=click.Choice(["json", "text"]),
    default="text",
    help="Output format",
)
@click.pass_context
def check(ctx: click.Context, query: str, output: str) -> None:
    """Classify a query against the configured ownership policy."""
    config = ctx.obj["config"]
    outcome = DomainValidator(config).validate(query.strip())

    if output == "json":
        click.echo(json.dumps(outcome.model_dump(mode="json"), indent=2))
    else:
        click.echo(f"Query: {outcome.query}")
        click.echo(f"Status: {outcome.status.value}")
        if outcome.domain:
            click.echo(f"Domain: {outcome.domain}")

    if not outcome.is_valid:
        sys.exit(2)


@cli.command()
@click.argument("query")
@click.option("--host", default="127.0.0.1", help="WHOIS server host")
@click.option("--port", default=43, type=int, help="WHOIS server port")
@click.option("--timeout", default=10.0, type=float, help="Seconds to wait for the reply")
def query(query: str, host: str, port: int, timeout: float) -> None:
    """Send a query to a running WHOIS server and print the reply."""

    async def run_query() -> bytes:
        chunks = []
        with anyio.fail_after(timeout):
            async with await anyio.connect_tcp(host, port) as stream:
                await stream.send(f"{query}\r\n".encode())
                while True:
                    try:
                        chunks.append(await stream.receive())
                    except anyio.EndOfStream:
                        break
        return b"".join(chunks)

    try:
        response = asyncio.run(run_query())
    except Exception as e:
        click.echo(f"✗ Query failed: {e}", err=True)
        sys.exit(1)

    click.echo(response.decode("utf-8", errors="replace"))


@cli.command("config")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show current configuration."""
    config = ctx.obj["config"]
    config_dict = config.to_dict()

    click.echo("Current Configuration:")
    click.echo("=" * 40)

    for key, value in config_dict.items():
        # Don't show sensitive information
        if "password" in key.lower() or "secret" in key.lower():
            value = "***"
        click.echo(f"{key}: {value}")


def main() -> None:
    """Main CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
