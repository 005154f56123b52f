"""Allow ``python -m enumbind``."""

from enumbind.cli import main

if __name__ == "__main__":
    main()
