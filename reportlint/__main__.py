"""Module entrypoint for running reportlint as ``python -m reportlint``."""

from __future__ import annotations

from reportlint.cli import main


if __name__ == "__main__":
    main()
