"""Allow ``python -m carthage_cache``."""

import sys

from carthage_cache.ui.cli import main

if __name__ == "__main__":
    sys.exit(main())
