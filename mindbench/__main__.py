"""``python -m mindbench``; also the target of the ``mindbench`` console script."""

from __future__ import annotations

from .app import run


def main() -> int:
    return run()


if __name__ == "__main__":
    raise SystemExit(main())
