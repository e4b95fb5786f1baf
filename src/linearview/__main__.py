"""Module entrypoint for ``python -m linearview``."""

from linearview.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
