import sys

from pokeball.server import main

if __name__ == "__main__":
    sys.exit(main())
