import sys

from arena.app.cli import main

sys.exit(main())
