"""Entry point for the stint CLI.

Usage:
    python -m stint.interfaces.cli.main

Or via installed entry point:
    stint <command>
"""

from stint.interfaces.cli import app


def main() -> None:
    """Run the stint CLI application."""
    app()


if __name__ == "__main__":
    main()
