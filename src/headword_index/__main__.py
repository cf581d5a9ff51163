import sys

from headword_index.cli import main

sys.exit(main())
