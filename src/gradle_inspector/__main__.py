import sys

from gradle_inspector import cli

sys.exit(cli.main())
