"""Allow ``python -m ressync``."""

import sys

from ressync.cli import main

sys.exit(main())
