"""Module entrypoint for ``python -m lazydir``.

All argument parsing and listing setup happen in ``lazydir.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
