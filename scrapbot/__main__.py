"""Entry point for ``python -m scrapbot``."""

from scrapbot.bot import main

if __name__ == "__main__":
    main()
