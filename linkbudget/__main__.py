"""Allow ``python -m linkbudget``."""

from linkbudget.cli import main

if __name__ == "__main__":
    main()
