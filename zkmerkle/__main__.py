"""Allow running the CLI with ``python -m zkmerkle``."""

from zkmerkle.cli.main import cli

if __name__ == "__main__":
    cli()
