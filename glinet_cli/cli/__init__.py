"""
Command Line Interface Package for glinet-cli

This package provides the CLI implementation with separated concerns:
- args.py: Argument parsing and validation
- formatters.py: Console text and table output
- logging_setup.py: Logging configuration
- main.py: Session bootstrap, command dispatch and entry point

License: MIT
"""

# Import main function from main module
from .main import main

# Export main function
__all__ = ["main"]
