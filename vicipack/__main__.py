import sys

from vicipack.cli import main

sys.exit(main())
