import sys

from symbol_cli.cli import main

sys.exit(main())
