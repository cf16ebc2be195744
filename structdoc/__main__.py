"""Allow ``python -m structdoc``."""

import sys

from structdoc.cli import main

sys.exit(main())
