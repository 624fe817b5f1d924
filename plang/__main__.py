import sys

from plang.cli import main

sys.exit(main())
