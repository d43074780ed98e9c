"""Entry point for 'python -m incapacidades' command."""

from incapacidades.cli import main

if __name__ == "__main__":
    main()
