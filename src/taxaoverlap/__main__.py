"""Entry point for ``python -m taxaoverlap``."""

from taxaoverlap.cli.typer_app import app

if __name__ == "__main__":
    app()
