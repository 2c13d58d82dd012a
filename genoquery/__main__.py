"""Entry point for running genoquery as a module: python -m genoquery."""

from genoquery.cli import app

if __name__ == "__main__":
    app()
