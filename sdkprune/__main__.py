"""
Entry point for running sdkprune as a module.

Usage: python -m sdkprune [command] [options]
"""

from sdkprune.cli.parser import main

if __name__ == "__main__":
    main()
