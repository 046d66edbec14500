"""Allow running accountctl with ``python -m accountctl``."""

from accountctl.cli.main import app

if __name__ == "__main__":
    app()
