"""
Entry point for the WordPress product media merge tool.
"""

from wp_media_migrator.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
