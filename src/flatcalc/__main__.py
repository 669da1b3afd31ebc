"""Allow running as ``python -m flatcalc``."""

from flatcalc.cli import main

if __name__ == "__main__":
    main()
