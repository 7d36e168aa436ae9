"""Main entry point for dcf-prep CLI."""

from dcf_prep.cli.app import app


def main():
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    main()
