#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Entry point for running markturn as a module.

This allows the package to be executed as:
    python -m markturn [arguments]
"""

import sys

from markturn.cli import main

if __name__ == "__main__":
    sys.exit(main())
