"""Entry point for ``python -m zsnapfree``."""

import sys

from zsnapfree.ui.cli import main

if __name__ == "__main__":
    sys.exit(main())
