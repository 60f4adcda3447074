"""Allow ``python -m mdtemplate``."""
import sys

from mdtemplate.cli._dispatcher import main

if __name__ == "__main__":
    sys.exit(main())
