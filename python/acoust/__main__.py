"""Allow running acoust with ``python -m acoust``."""

import sys

from acoust.main import main

sys.exit(main())
