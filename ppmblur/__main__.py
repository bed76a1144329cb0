import sys

from .cli.blur import main

sys.exit(main())
