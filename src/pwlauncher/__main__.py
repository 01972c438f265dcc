"""Allow ``python -m pwlauncher``."""

from pwlauncher.cli import main

if __name__ == "__main__":
    main()
