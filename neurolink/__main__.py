import sys

from neurolink.cli import main

sys.exit(main())
