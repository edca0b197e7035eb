"""Allow ``python -m modstage.cli``."""
import sys

from modstage.cli._dispatcher import main

sys.exit(main())
