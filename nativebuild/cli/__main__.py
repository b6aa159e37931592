"""
Entry point for running nativebuild CLI as a module.

Usage: python -m nativebuild.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
