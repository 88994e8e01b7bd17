"""CLI entry point for ipwatch."""

import asyncio
from pathlib import Path

import click

from ipwatch import __version__
from ipwatch.config import Config, load_config
from ipwatch.errors import ConfigError
from ipwatch.logging import setup_logging


async def _watch(config: Config) -> None:
    """Run the watch loop until cancelled."""
    from ipwatch.fetcher import IpFetcher
    from ipwatch.monitor import IpWatcher

    async with IpFetcher(timeout=config.request_timeout) as fetcher:
        watcher = IpWatcher(
            fetcher=fetcher,
            endpoint=config.endpoint,
            max_attempts=config.max_retries,
            check_interval=config.interval,
        )
        await watcher.run_forever()


@click.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, path_type=Path),
    default=None,
    help="Path to config file.",
)
@click.option("--interval", type=int, default=None, help="Interval between IP checks in seconds.")
@click.option(
    "--log",
    "log_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Log file path (if not specified, logs to the console only).",
)
@click.option("--endpoint", default=None, help="URL of the IP checking service.")
@click.option(
    "--quiet/--no-quiet",
    default=None,
    help="Only log to the log file, not the console.",
)
@click.option(
    "--max-retries",
    type=int,
    default=None,
    help="Maximum number of attempts when fetching the external IP.",
)
@click.option("--timeout", "request_timeout", type=float, default=None, help="Per-request timeout in seconds.")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ...).")
@click.version_option(__version__, prog_name="ipwatch")
def main(
    config_path: Path | None,
    interval: int | None,
    log_file: str | None,
    endpoint: str | None,
    quiet: bool | None,
    max_retries: int | None,
    request_timeout: float | None,
    log_level: str | None,
) -> None:
    """Watch this host's external IP address and log when it changes."""
    config = load_config(config_path).with_overrides(
        interval=interval,
        log_file=log_file,
        endpoint=endpoint,
        quiet=quiet,
        max_retries=max_retries,
        request_timeout=request_timeout,
        log_level=log_level,
    )

    try:
        config.validate()
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    if config.log_file:
        try:
            Path(config.log_file).parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            click.echo(f"Failed to create log directory: {e}", err=True)
            raise SystemExit(1)

    try:
        logger = setup_logging(config)
    except OSError as e:
        click.echo(f"Failed to open log file: {e}", err=True)
        raise SystemExit(1)

    logger.info(f"IP Watcher starting. Will check IP every {config.interval} seconds")

    try:
        asyncio.run(_watch(config))
    except KeyboardInterrupt:
        logger.info("IP Watcher stopped")
