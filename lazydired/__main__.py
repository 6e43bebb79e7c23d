"""Module entrypoint for ``python -m lazydired``.

Argument parsing and session setup happen in ``lazydired.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
