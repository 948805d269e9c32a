"""Allow `python -m turtlefmt`."""

import sys

from turtlefmt.cli import main

sys.exit(main())
