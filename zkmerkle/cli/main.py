"""
CLI entry point for zkmerkle.

Provides command-line interface for building Merkle commitments over value
files, generating inclusion proofs and verifying them.
"""

import sys
from pathlib import Path
from typing import Optional

import click

from zkmerkle._version import __version__
from zkmerkle.cli.context import CLIContext, pass_context
from zkmerkle.config.settings import get_default_config_path, load_config
from zkmerkle.exceptions import InvalidConfigurationError
from zkmerkle.logging_config import get_logger, set_correlation_id, setup_logging


@click.group()
@click.option(
    '--config',
    '-c',
    type=click.Path(exists=False, dir_okay=False, path_type=Path),
    default=None,
    help=f'Path to configuration file (default: {get_default_config_path()})',
)
@click.option(
    '--log-level',
    '-l',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], case_sensitive=False),
    default=None,
    help='Set logging level (overrides configuration)',
)
@click.option(
    '--verbose',
    '-v',
    is_flag=True,
    help='Enable verbose output',
)
@click.version_option(version=__version__, prog_name='zkmerkle')
@pass_context
def cli(ctx: CLIContext, config: Optional[Path], log_level: Optional[str], verbose: bool):
    """
    zkmerkle - Merkle tree commitments for zero-knowledge circuits.

    Builds Merkle roots over value files, generates inclusion proofs and
    verifies them against a root.
    """
    ctx.verbose = verbose
    ctx.config_path = str(config) if config else None

    try:
        ctx.config = load_config(ctx.config_path)
    except InvalidConfigurationError as e:
        click.echo(f"Error: Invalid configuration: {e}", err=True)
        sys.exit(1)

    effective_log_level = log_level.upper() if log_level else ctx.config.logging.level
    log_file = Path(ctx.config.logging.file) if ctx.config.logging.file else None

    try:
        setup_logging(
            level=effective_log_level,
            log_file=log_file,
            json_format=ctx.config.logging.format == "json",
        )
    except OSError as e:
        click.echo(f"Error: Failed to set up logging: {e}", err=True)
        sys.exit(1)

    set_correlation_id()

    if verbose:
        logger = get_logger("cli")
        logger.info(
            "cli_started",
            config_path=ctx.config_path or "defaults",
            log_level=effective_log_level,
        )


from zkmerkle.cli.merkle import demo, inspect_tree, prove, root, verify
cli.add_command(root)
cli.add_command(prove)
cli.add_command(verify)
cli.add_command(inspect_tree, name='inspect')
cli.add_command(demo)


if __name__ == '__main__':
    cli()
