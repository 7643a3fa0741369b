"""Allow running dir-worker with ``python -m dir_worker``."""

from .cli import main

if __name__ == '__main__':
    main()
