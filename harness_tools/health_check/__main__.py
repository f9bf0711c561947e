import sys

from .health_checker import main


if __name__ == "__main__":
    sys.exit(main())
