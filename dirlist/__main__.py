"""Module entrypoint for ``python -m dirlist``.

This keeps module-mode execution behavior identical to the console script.
All argument parsing and output happen in ``dirlist.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
