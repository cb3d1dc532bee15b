import sys

from akismet.cli import main

sys.exit(main())
