"""Allow running hunkpick with ``python -m hunkpick``."""

from hunkpick.cli import main

if __name__ == "__main__":
    main()
