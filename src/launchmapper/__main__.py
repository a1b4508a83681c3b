"""Allow running as ``python -m launchmapper``."""

from launchmapper.cli.main import cli

if __name__ == "__main__":
    cli()
