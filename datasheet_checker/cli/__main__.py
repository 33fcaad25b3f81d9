from __future__ import annotations

from datasheet_checker.cli.commands import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
