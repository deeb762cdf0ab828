import sys

from bb84sim.cli import main

sys.exit(main())
