import sys

from paybysquare.cli import main

sys.exit(main())
