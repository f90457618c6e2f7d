import sys

from dbrunbook.cli import main

sys.exit(main())
