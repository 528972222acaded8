"""Allow running the runner with ``python -m feedsync``."""

from feedsync.main import main

if __name__ == "__main__":
    main()
