"""Allow ``python -m explorer_core``."""

from explorer_core.cli import app

if __name__ == "__main__":
    app()
