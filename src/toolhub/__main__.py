"""Entry point for 'python -m toolhub' command."""

from toolhub.cli import main

if __name__ == "__main__":
    main()
