import sys

from thaumpath.cli import main

sys.exit(main())
