"""Module entrypoint for ``python -m snippetview``."""

from .cli import main


if __name__ == "__main__":
    main()
