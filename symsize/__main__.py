"""Module entry point for ``python -m symsize``."""

from symsize.cli import main

if __name__ == "__main__":
    main()
