"""Main entry point for lumamap."""

from lumamap.cli import main

if __name__ == "__main__":
    main()
