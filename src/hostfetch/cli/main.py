"""hostfetch CLI - Main entry point."""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.text import Text

from hostfetch import __version__

logger = logging.getLogger(__name__)

console = Console(stderr=True)


def _setup_logging(verbose: bool) -> logging.Handler:
    """Send log records to stderr so they never mix with the report."""
    log_format = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(log_format))
    root_logger.addHandler(handler)
    return handler


@click.command()
@click.version_option(version=__version__, prog_name="hostfetch")
@click.option("--no-color", is_flag=True, help="Disable colors and print plain aligned text")
@click.option("--json", "as_json", is_flag=True, help="Emit the report as JSON")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    help="Configuration file (default: ~/.hostfetch/config.yaml)",
)
@click.option("--verbose", is_flag=True, help="Log collector diagnostics to stderr")
def cli(no_color, as_json, config_path, verbose):
    """hostfetch - host hardware and OS inventory.

    Prints CPU, GPU, memory, storage, volume and network facts next to a logo,
    or as JSON for scripting.
    """
    handler = _setup_logging(verbose)
    try:
        _run(no_color, as_json, config_path)
    finally:
        logging.getLogger().removeHandler(handler)


def _run(no_color: bool, as_json: bool, config_path: Path | None) -> None:
    from hostfetch.config.loader import ConfigError, load_hostfetch_config
    from hostfetch.hardware.report import collect_report
    from hostfetch.hardware.source import PowerShellCimSource

    try:
        config = load_hostfetch_config(config_path)
    except ConfigError as e:
        console.print(Text(str(e), style="red"))
        raise SystemExit(1)

    logger.debug(f"Querying CIM via {config.powershell} (timeout {config.query_timeout}s)")
    source = PowerShellCimSource(executable=config.powershell, timeout=config.query_timeout)
    report = collect_report(source)

    if as_json:
        from hostfetch.reporters.json_reporter import render_json

        click.echo(render_json(report))
        return

    from hostfetch.reporters.text import TextReporter

    reporter = TextReporter(
        color=config.color and not no_color,
        art_color=config.art_color,
        label_color=config.label_color,
        show_swatch=config.show_swatch,
    )
    reporter.print(report)


if __name__ == "__main__":
    cli()
