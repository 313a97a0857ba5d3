import sys

from stutter.repl import main

sys.exit(main())
