"""
Command line interface for quizdrill.

Commands live in quizdrill.cli.main; run with `quizdrill --help`
or `python -m quizdrill --help`.
"""

from quizdrill.cli.main import app, main

__all__ = ["app", "main"]
