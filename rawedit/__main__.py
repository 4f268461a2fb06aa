"""Rawedit CLI entry point.

Allows running via `python -m rawedit` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import sys
from typing import Optional

from . import __version__

USAGE = "usage: rawedit [--version] [path]"


def main(argv: Optional[list[str]] = None) -> None:
    # Very small arg parsing: version flag and an optional filename
    args = sys.argv[1:] if argv is None else argv
    if args and args[0] in ("--version", "-V"):
        print(f"rawedit {__version__}")
        return
    if len(args) > 1:
        print(USAGE, file=sys.stderr)
        sys.exit(2)

    # Lazy import to avoid importing terminal deps for --version
    from .editor import Editor
    editor = Editor()
    try:
        if args:
            editor.open_file(args[0])
        editor.run()
    except (OSError, UnicodeError) as e:
        print(f"rawedit: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
