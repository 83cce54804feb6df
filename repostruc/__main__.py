"""Module entrypoint for ``python -m repostruc``.

This keeps module-mode execution behavior identical to the CLI script.
All argument parsing and output writing happen in ``repostruc.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
