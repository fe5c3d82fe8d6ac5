"""
Entry point for running ohoskit as a module.

Usage: python -m ohoskit [command] [options]
"""

from ohoskit.cli.parser import main

if __name__ == "__main__":
    main()
