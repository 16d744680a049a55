"""Entry point for ``python -m proplint``."""

from proplint.main import main

if __name__ == "__main__":
    raise SystemExit(main())
