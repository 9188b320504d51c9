"""Main entry point for ``python -m mdreader``."""

from mdreader.cli import main

if __name__ == "__main__":
    main()
