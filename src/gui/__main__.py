"""Module entrypoint for `python -m gui`."""

from __future__ import annotations

from . import launcher as _launcher


def main():  # pragma: no cover - runtime delegation
    raise SystemExit(_launcher.main())


if __name__ == "__main__":  # pragma: no cover
    main()
