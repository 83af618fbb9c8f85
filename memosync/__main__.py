"""Entry point for ``python -m memosync``."""

from memosync.cli.commands import app

if __name__ == "__main__":
    app()
