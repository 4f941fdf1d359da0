import sys

from shapesight.cli import main

sys.exit(main())
