from __future__ import annotations

from primer_demos.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
