"""Entry point for ``python -m arpo``."""

from .cli import cli

if __name__ == "__main__":
    cli()
