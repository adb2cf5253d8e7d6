import sys

from bplus_trees.console import main

sys.exit(main())
