from __future__ import annotations

from order_filter.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
