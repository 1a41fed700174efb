import sys

from surpriselift.cli import main

sys.exit(main())
