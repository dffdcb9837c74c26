import sys

from lishp.repl import main

sys.exit(main())
