"""Allow running as ``python -m ipwatch``."""

from ipwatch.cli import main

if __name__ == "__main__":
    main()
