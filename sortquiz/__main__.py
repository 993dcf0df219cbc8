import sys

from sortquiz.cli import main

sys.exit(main())
