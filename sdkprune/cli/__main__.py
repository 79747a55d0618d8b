"""
Entry point for running the sdkprune CLI as a module.

Usage: python -m sdkprune.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
