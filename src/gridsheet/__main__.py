"""Entry point for ``python -m gridsheet``."""

from gridsheet.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
