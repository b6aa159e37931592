"""
Entry point for running nativebuild CLI as a module.

Usage: python -m nativebuild [command] [options]
"""

from nativebuild.cli.parser import main

if __name__ == "__main__":
    main()
