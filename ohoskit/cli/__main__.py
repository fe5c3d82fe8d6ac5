"""
Entry point for running the ohoskit CLI as a module.

Usage: python -m ohoskit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
