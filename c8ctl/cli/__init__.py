"""
Command Line Interface for c8ctl.
"""

from c8ctl.cli.app import app, main

__all__ = ["app", "main"]
