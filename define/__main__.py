"""Allow running the CLI with ``python -m define``."""

from define.cli.main import run

if __name__ == "__main__":
    run()
