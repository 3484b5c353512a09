import sys

from ansi_markup.cli import main

sys.exit(main())
