"""Module entrypoint for ``python -m reproject``.

This keeps module-mode execution behavior identical to the CLI script.
All argument parsing and dispatch happen in ``reproject.cli``.
"""

from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
