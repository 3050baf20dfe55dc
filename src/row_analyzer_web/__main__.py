from __future__ import annotations

from .web import main

if __name__ == "__main__":
    raise SystemExit(main())
